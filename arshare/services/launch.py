from dataclasses import dataclass, asdict
from urllib.parse import quote
from .platform import IOS, ANDROID
from ..errors import MissingAsset

IOS_QUICKLOOK = 'ios-quicklook'
ANDROID_SCENEVIEWER = 'android-sceneviewer'
DESKTOP_FALLBACK = 'desktop-fallback'

SCENE_VIEWER_PACKAGE = 'com.google.android.googlequicksearchbox'
SCENE_VIEWER_FALLBACK_URL = 'https://developers.google.com/ar'
SCENE_VIEWER_TEMPLATE = (
    'intent://arvr.google.com/scene-viewer/1.0?file={file}&mode=ar_only&title={title}'
    '#Intent;scheme=https;package={package};action=android.intent.action.VIEW;'
    'S.browser_fallback_url={fallback};end;'
)

# Same set encodeURIComponent leaves alone (besides alphanumerics and _.-~)
_URI_COMPONENT_SAFE = "!*'()"


@dataclass(frozen=True)
class LaunchDescriptor:
    kind: str
    uri: str | None = None
    preview_url: str | None = None

    def to_dict(self):
        return asdict(self)


def encode_uri_component(value: str) -> str:
    return quote(value, safe=_URI_COMPONENT_SAFE)


def scene_viewer_intent(glb_url: str, title: str) -> str:
    return SCENE_VIEWER_TEMPLATE.format(
        file=encode_uri_component(glb_url),
        title=encode_uri_component(title),
        package=SCENE_VIEWER_PACKAGE,
        fallback=SCENE_VIEWER_FALLBACK_URL,
    )


def build_launch(record, platform) -> LaunchDescriptor:
    """Pick the AR launch for this device. Raises MissingAsset instead of building a dead link."""
    if platform.is_mobile and platform.platform == IOS:
        # Quick Look opens on the USDZ content type, a plain link is enough
        if not record.asset_ref_usdz:
            raise MissingAsset('usdz', record.share_link_id)
        return LaunchDescriptor(IOS_QUICKLOOK, uri=record.asset_ref_usdz, preview_url=record.asset_ref_glb)
    if platform.is_mobile and platform.platform == ANDROID:
        if not record.asset_ref_glb:
            raise MissingAsset('glb', record.share_link_id)
        uri = scene_viewer_intent(record.asset_ref_glb, record.product_name or '')
        return LaunchDescriptor(ANDROID_SCENEVIEWER, uri=uri, preview_url=record.asset_ref_glb)
    return LaunchDescriptor(DESKTOP_FALLBACK, preview_url=record.asset_ref_glb)
