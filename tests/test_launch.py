import pytest

from arshare.errors import MissingAsset
from arshare.services.launch import (
    build_launch, encode_uri_component, ANDROID_SCENEVIEWER, DESKTOP_FALLBACK, IOS_QUICKLOOK,
)
from arshare.services.platform import Platform
from arshare.services.resolver import ProjectShare

IOS_MOBILE = Platform('ios', 'mobile')
ANDROID_MOBILE = Platform('android', 'mobile')
DESKTOP = Platform('other', 'desktop')


def test_android_gets_scene_viewer_intent(protected_share):
    launch = build_launch(protected_share, ANDROID_MOBILE)
    assert launch.kind == ANDROID_SCENEVIEWER
    assert 'file=https%3A%2F%2Fx%2Fy.glb' in launch.uri
    assert 'title=Chair' in launch.uri
    assert launch.uri == (
        'intent://arvr.google.com/scene-viewer/1.0?file=https%3A%2F%2Fx%2Fy.glb&mode=ar_only&title=Chair'
        '#Intent;scheme=https;package=com.google.android.googlequicksearchbox;'
        'action=android.intent.action.VIEW;S.browser_fallback_url=https://developers.google.com/ar;end;'
    )


def test_android_title_is_uri_encoded():
    share = ProjectShare('ar-1', product_name="Oak Table & Chairs (v2)", asset_ref_glb='https://x/a b.glb')
    uri = build_launch(share, ANDROID_MOBILE).uri
    assert 'title=Oak%20Table%20%26%20Chairs%20(v2)' in uri
    assert 'file=https%3A%2F%2Fx%2Fa%20b.glb' in uri


def test_android_without_glb_is_missing_asset():
    share = ProjectShare('ar-1', product_name='Chair', asset_ref_glb=None)
    with pytest.raises(MissingAsset) as exc:
        build_launch(share, ANDROID_MOBILE)
    assert exc.value.kind == 'glb'


def test_ios_links_directly_to_usdz(protected_share):
    launch = build_launch(protected_share, IOS_MOBILE)
    assert launch.kind == IOS_QUICKLOOK
    assert launch.uri == 'https://x/y.usdz'


def test_ios_without_usdz_is_missing_asset(public_share):
    with pytest.raises(MissingAsset) as exc:
        build_launch(public_share, IOS_MOBILE)
    assert exc.value.kind == 'usdz'
    assert exc.value.share_link_id == 'ar-public'


@pytest.mark.parametrize('platform', [
    DESKTOP, Platform('other', 'mobile'), Platform('android', 'desktop'), Platform('ios', 'desktop'),
])
def test_everything_else_falls_back_to_desktop(protected_share, platform):
    launch = build_launch(protected_share, platform)
    assert launch.kind == DESKTOP_FALLBACK
    assert launch.uri is None
    assert launch.preview_url == 'https://x/y.glb'


def test_desktop_fallback_without_glb_has_no_preview():
    launch = build_launch(ProjectShare('ar-1'), DESKTOP)
    assert launch.to_dict() == {'kind': DESKTOP_FALLBACK, 'uri': None, 'preview_url': None}


def test_encode_uri_component_matches_browser_rules():
    assert encode_uri_component("a-_.!~*'()b") == "a-_.!~*'()b"
    assert encode_uri_component('a/b?c=d&e') == 'a%2Fb%3Fc%3Dd%26e'
    assert encode_uri_component('é') == '%C3%A9'
