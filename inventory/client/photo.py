"""
照片附件策略

启动时按配置选定一次，之后所有上传都走同一个策略。
"""
import base64
import binascii
import mimetypes
import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional, Tuple, Type, Union

PhotoSource = Union[str, Path, bytes]
PhotoUpload = Tuple[str, bytes, str]  # (filename, content, content_type)

_DATA_URI_PATTERN = re.compile(r"data:(?P<mime>image/[\w.+-]+);base64,(?P<data>.*)", re.DOTALL)


class PhotoAttachment(ABC):
    """把调用方持有的照片来源转换成 multipart 上传内容"""

    @abstractmethod
    def to_upload(self, source: PhotoSource) -> PhotoUpload:
        ...

    def to_files(self, source: Optional[PhotoSource]) -> Optional[Dict[str, PhotoUpload]]:
        if source is None or source == "":
            return None
        return {"photo": self.to_upload(source)}


class FilePhotoAttachment(PhotoAttachment):
    """本地文件路径（原生端相机/相册给出的路径）"""

    def to_upload(self, source: PhotoSource) -> PhotoUpload:
        if isinstance(source, bytes):
            return "photo.jpg", source, "image/jpeg"

        path = Path(source)
        content_type = mimetypes.guess_type(path.name)[0] or "image/jpeg"
        return path.name, path.read_bytes(), content_type


class DataUriPhotoAttachment(PhotoAttachment):
    """`data:image/...;base64,` 形式（浏览器端）"""

    def to_upload(self, source: PhotoSource) -> PhotoUpload:
        if isinstance(source, bytes):
            source = source.decode("ascii")

        match = _DATA_URI_PATTERN.fullmatch(str(source).strip())
        if match is None:
            raise ValueError("photo is not a base64 image data URI")

        try:
            content = base64.b64decode(match.group("data"), validate=True)
        except binascii.Error as e:
            raise ValueError(f"invalid base64 photo data: {e}") from e

        content_type = match.group("mime")
        extension = mimetypes.guess_extension(content_type) or ".jpg"
        return f"photo{extension}", content, content_type


_STRATEGIES: Dict[str, Type[PhotoAttachment]] = {
    "file": FilePhotoAttachment,
    "data_uri": DataUriPhotoAttachment,
}


def select_photo_attachment(name: str) -> PhotoAttachment:
    try:
        return _STRATEGIES[name.lower()]()
    except KeyError:
        raise ValueError(f"unknown photo attachment strategy: {name!r}") from None
