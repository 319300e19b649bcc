"""
文件工具函数
处理照片保存、删除与路径转换
"""
import uuid
from pathlib import Path
from typing import Optional
from fastapi import UploadFile
from inventory.core.core_config import settings
from inventory.utils.util_error_map import ServerErrorCode
from inventory.utils.util_error_handle import ValidationError
import logging

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).parent.parent.parent

# 副檔名缺失時依 content-type 推斷
_CONTENT_TYPE_TO_EXTENSION = {
    "image/png": ".png",
    "image/jpeg": ".jpeg",
    "image/jpg": ".jpg",
    "image/gif": ".gif",
    "image/webp": ".webp",
}


def get_upload_dir() -> Path:
    """照片存放目录（相对路径以项目根目录为基准）"""
    upload_dir = PROJECT_ROOT / settings.UPLOAD_DIR
    upload_dir.mkdir(parents=True, exist_ok=True)
    return upload_dir


async def save_uploaded_photo(file: Optional[UploadFile]) -> Optional[str]:
    """
    验证并保存上传的照片

    Returns:
        Optional[str]: 保存后的文件名（只存文件名，不含目录）；未上传时返回 None

    Raises:
        ValidationError: 类型不支持、空文件或超过大小限制
    """
    if file is None or not file.filename:
        return None

    extension = _resolve_extension(file)
    content = await file.read()

    if len(content) == 0:
        raise ValidationError(ServerErrorCode.REQUEST_PARAMETERS_INVALID_43)
    if len(content) > settings.MAX_UPLOAD_SIZE:
        raise ValidationError(ServerErrorCode.PHOTO_TOO_LARGE_43)

    file_name = f"{uuid.uuid4().hex}{extension}"
    with open(get_upload_dir() / file_name, "wb") as f:
        f.write(content)

    logger.info("Saved photo %s (%d bytes)", file_name, len(content))
    return file_name


def delete_uploaded_file(file_name: Optional[str]) -> bool:
    """
    删除上传的照片

    Returns:
        bool: 文件已不存在或删除成功返回 True，路径非法或删除失败返回 False
    """
    file_path = get_file_path(file_name)
    if file_path is None:
        return False

    try:
        if file_path.exists() and file_path.is_file():
            file_path.unlink()
        return True
    except OSError as e:
        logger.error(f"Error deleting file {file_name}: {e}", exc_info=True)
        return False


def get_file_path(file_name: Optional[str]) -> Optional[Path]:
    """文件名转本地路径，只允许落在上传目录内"""
    if not file_name:
        return None

    upload_dir = get_upload_dir().resolve()
    file_path = (upload_dir / Path(file_name).name).resolve()
    if file_path.parent != upload_dir:
        return None
    return file_path


def _resolve_extension(file: UploadFile) -> str:
    content_type = (file.content_type or "").lower()
    if content_type and not content_type.startswith("image/") and content_type != "application/octet-stream":
        raise ValidationError(ServerErrorCode.PHOTO_TYPE_NOT_SUPPORTED_43)

    extension = Path(file.filename or "").suffix.lower()
    if extension in settings.ALLOWED_IMAGE_EXTENSIONS:
        return extension

    extension = _CONTENT_TYPE_TO_EXTENSION.get(content_type, "")
    if extension in settings.ALLOWED_IMAGE_EXTENSIONS:
        return extension

    raise ValidationError(ServerErrorCode.PHOTO_TYPE_NOT_SUPPORTED_43)
