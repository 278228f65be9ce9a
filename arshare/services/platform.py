import re
from dataclasses import dataclass

MOBILE_RE = re.compile(r'android|webos|iphone|ipad|ipod|blackberry|iemobile|opera mini', re.I)
IOS_RE = re.compile(r'iphone|ipad', re.I)
ANDROID_RE = re.compile(r'android', re.I)

IOS, ANDROID, OTHER = 'ios', 'android', 'other'
MOBILE, DESKTOP = 'mobile', 'desktop'


@dataclass(frozen=True)
class Platform:
    platform: str
    device_class: str

    @property
    def is_mobile(self) -> bool:
        return self.device_class == MOBILE


def classify(signal: str | None) -> Platform:
    """Classify a client signal (usually the User-Agent) into platform + device class."""
    signal = signal or ''
    device_class = MOBILE if MOBILE_RE.search(signal) else DESKTOP
    if IOS_RE.search(signal):
        platform = IOS
    elif ANDROID_RE.search(signal):
        platform = ANDROID
    else:
        platform = OTHER
    return Platform(platform, device_class)


def client_signal(request) -> str:
    ua = request.headers.get('User-Agent', '')
    # Chromium client hint, quoted e.g. "Android"
    hint = request.headers.get('Sec-CH-UA-Platform', '').strip('"')
    return f"{ua} {hint}".strip()
