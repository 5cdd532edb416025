"""Generic extractors and the parsing helpers they share.

The extractors are configured by a RetailerProfile; import them from their
modules (listing, details, reviews).
"""
