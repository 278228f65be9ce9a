import io
from dataclasses import dataclass
import qrcode
from qrcode.constants import ERROR_CORRECT_L, ERROR_CORRECT_M, ERROR_CORRECT_Q, ERROR_CORRECT_H
from . import bypass

PREVIEW_PATH = '/ar-client-preview'

_LEVELS = {'L': ERROR_CORRECT_L, 'M': ERROR_CORRECT_M, 'Q': ERROR_CORRECT_Q, 'H': ERROR_CORRECT_H}


@dataclass(frozen=True)
class QROptions:
    pixel_size: int = 220
    margin_modules: int = 2
    error_correction: str = 'M'
    foreground: str = '#374151'
    background: str = '#FFFFFF'


DEFAULT_OPTIONS = QROptions()


def build_target_url(base_url: str, share_link_id: str, grant: str | None = None, path: str = PREVIEW_PATH) -> str:
    """URL a scanned code opens; carries the bypass token when this device holds a grant."""
    url = f"{base_url.rstrip('/')}{path}?id={share_link_id}"
    if grant:
        url += f"&access={bypass.encode(grant)}"
    return url


def _make_image(url: str, options: QROptions):
    qr = qrcode.QRCode(
        version=None,
        error_correction=_LEVELS[options.error_correction],
        border=options.margin_modules,
    )
    qr.add_data(url)
    qr.make(fit=True)
    # pixel_size is the full width including the quiet zone
    qr.box_size = max(1, options.pixel_size // (qr.modules_count + 2 * options.margin_modules))
    return qr.make_image(fill_color=options.foreground, back_color=options.background)


def render_qr_png(url: str, options: QROptions = DEFAULT_OPTIONS) -> bytes:
    img = _make_image(url, options)
    buf = io.BytesIO()
    img.save(buf, format='PNG')
    return buf.getvalue()


def make_qr(url: str, path: str, options: QROptions = DEFAULT_OPTIONS):
    _make_image(url, options).save(path)
