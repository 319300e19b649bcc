"""
QR 码图片生成
PNG 用于显示/分享，1-bit 点阵用于热敏标签打印机
"""
import io
import qrcode
from PIL import Image


def _make_qr_image(payload: str, box_size: int = 10, border: int = 4) -> Image.Image:
    qr = qrcode.QRCode(
        version=None,
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=box_size,
        border=border,
    )
    qr.add_data(payload)
    qr.make(fit=True)
    return qr.make_image(fill_color="black", back_color="white").convert("L")


def render_qr_png(payload: str, box_size: int = 10, border: int = 4) -> bytes:
    img = _make_qr_image(payload, box_size=box_size, border=border)
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def render_qr_bitmap(payload: str, size: int = 128) -> bytes:
    """
    生成打印机使用的点阵

    每行 size 个像素，MSB 在前，1 = 黑色模块；
    size 必须是 8 的倍数，总长度为 size * size / 8 字节
    """
    if size <= 0 or size % 8 != 0:
        raise ValueError(f"bitmap size must be a positive multiple of 8, got {size}")

    img = _make_qr_image(payload, box_size=1, border=2).resize((size, size), Image.NEAREST)
    # 暗色像素置 1
    img = img.point(lambda p: 255 if p < 128 else 0).convert("1")
    return img.tobytes()
