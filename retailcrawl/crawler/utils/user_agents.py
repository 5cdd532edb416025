"""User-Agent rotation for outbound page requests."""

import random
from typing import List, Optional, Sequence


# Mix of desktop and mobile browsers on Windows, macOS, Linux, Android and iOS
USER_AGENTS: List[str] = [
    # Chrome on Windows
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/130.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Windows NT 11.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36",
    # Chrome on macOS
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 14_1_0) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36",
    # Chrome on Linux
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36",
    "Mozilla/5.0 (X11; Ubuntu; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36",
    # Firefox
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:133.0) Gecko/20100101 Firefox/133.0",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10.15; rv:133.0) Gecko/20100101 Firefox/133.0",
    "Mozilla/5.0 (X11; Linux x86_64; rv:133.0) Gecko/20100101 Firefox/133.0",
    # Safari on macOS
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/18.2 Safari/605.1.15",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.6 Safari/605.1.15",
    # Edge
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36 Edg/131.0.0.0",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36 Edg/131.0.0.0",
    # Android Chrome
    "Mozilla/5.0 (Linux; Android 13; Pixel 7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/131.0.0.0 Mobile Safari/537.36",
    "Mozilla/5.0 (Linux; Android 14; SM-S911B) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/131.0.0.0 Mobile Safari/537.36",
    # iOS Safari
    "Mozilla/5.0 (iPhone; CPU iPhone OS 17_2 like Mac OS X) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.2 Mobile/15E148 Safari/604.1",
    "Mozilla/5.0 (iPad; CPU OS 17_2 like Mac OS X) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.2 Mobile/15E148 Safari/604.1",
]

_PLATFORM_MARKERS = {
    "windows": ("Windows NT",),
    "macos": ("Macintosh",),
    "linux": ("X11; Linux", "X11; Ubuntu"),
    "android": ("Android",),
    "ios": ("iPhone", "iPad"),
}


def is_browser(user_agent: str, browser: str) -> bool:
    """Check a user-agent string against a browser family name."""
    browser = browser.lower()
    if browser == "edge":
        return "Edg/" in user_agent
    if browser == "chrome":
        return "Chrome/" in user_agent and "Edg/" not in user_agent
    if browser == "firefox":
        return "Firefox/" in user_agent
    if browser == "safari":
        return "Safari/" in user_agent and "Chrome/" not in user_agent
    return False


def get_random_user_agent() -> str:
    """Get a random user-agent string from the pool.

    Returns:
        Random user-agent string
    """
    return random.choice(USER_AGENTS)


class UserAgentRotator:
    """Round-robin rotation over a shuffled user-agent pool.

    The pool is shuffled once on construction so that separate crawlers do
    not present the same sequence of agents.
    """

    def __init__(self, user_agents: Optional[Sequence[str]] = None, shuffle: bool = True):
        self._user_agents = list(user_agents or USER_AGENTS)
        if not self._user_agents:
            raise ValueError("user agent pool must not be empty")
        if shuffle:
            random.shuffle(self._user_agents)
        self._index = 0

    def next(self) -> str:
        """Return the next user agent, wrapping around at the end of the pool."""
        user_agent = self._user_agents[self._index]
        self._index = (self._index + 1) % len(self._user_agents)
        return user_agent

    def random(self) -> str:
        return random.choice(self._user_agents)

    def by_platform(self, platform: str) -> List[str]:
        """User agents for a platform ('windows', 'macos', 'linux', 'android', 'ios')."""
        markers = _PLATFORM_MARKERS.get(platform.lower(), ())
        return [ua for ua in self._user_agents if any(m in ua for m in markers)]

    def by_browser(self, browser: str) -> List[str]:
        """User agents for a browser family ('chrome', 'firefox', 'safari', 'edge')."""
        return [ua for ua in self._user_agents if is_browser(ua, browser)]

    def all(self) -> List[str]:
        return list(self._user_agents)

    def __len__(self) -> int:
        return len(self._user_agents)
