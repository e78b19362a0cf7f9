from typing import Iterable, Optional

from django.conf import settings


def validate_upload(f, *, max_mb: Optional[float]=None, allowed_types: Optional[Iterable[str]]=None) -> str:
    """Check size and content type of an uploaded file; returns the content type."""
    if f is None:
        raise ValueError('File is required')
    max_mb = settings.UPLOAD_MAX_MB if max_mb is None else max_mb
    allowed_types = settings.ALLOWED_UPLOAD_TYPES if allowed_types is None else allowed_types
    size_mb = (f.size or 0) / (1024*1024)
    if size_mb > max_mb:
        raise ValueError(f'File too large (max {max_mb} MB)')
    ctype = getattr(f, 'content_type', '') or ''
    if not any(ctype.startswith(prefix) for prefix in allowed_types):
        raise ValueError('Unsupported file type')
    return ctype


def validate_image(f) -> str:
    return validate_upload(f, max_mb=settings.IMAGE_UPLOAD_MAX_MB, allowed_types=['image/'])
