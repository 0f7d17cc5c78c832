"""
Clients for third-party services: YouTube, Google Sheets, OCR, email relay
and local blob storage.
"""

from .email import EmailClient, password_reset_email, verification_email
from .ocr import IdCardDataExtractor, LlamaOcrClient
from .sheets import GoogleSheetsClient, normalize_header, rows_to_records
from .storage import LocalBlobStorage
from .youtube import YouTubeClient

__all__ = [
    "EmailClient",
    "GoogleSheetsClient",
    "IdCardDataExtractor",
    "LlamaOcrClient",
    "LocalBlobStorage",
    "YouTubeClient",
    "normalize_header",
    "password_reset_email",
    "rows_to_records",
    "verification_email",
]
