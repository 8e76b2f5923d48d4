"""
File Upload Utility - validate uploads and extract text from resume files.

Supported formats:
- PDF (.pdf) using PyPDF2
- Word (.docx) using python-docx
- Plain Text (.txt)
- Images (.png, .jpg, .jpeg, .webp) - passed to the model as-is

Max file size: 5MB
"""

import io
from typing import Tuple
from fastapi import UploadFile, HTTPException
from PyPDF2 import PdfReader
from docx import Document


MAX_FILE_SIZE_MB = 5
MAX_FILE_SIZE_BYTES = MAX_FILE_SIZE_MB * 1024 * 1024

PDF_MIME = "application/pdf"
DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
TXT_MIME = "text/plain"

MIME_TYPES = {
    '.pdf': PDF_MIME,
    '.docx': DOCX_MIME,
    '.txt': TXT_MIME,
    '.png': "image/png",
    '.jpg': "image/jpeg",
    '.jpeg': "image/jpeg",
    '.webp': "image/webp",
}
ALLOWED_EXTENSIONS = set(MIME_TYPES)

TEXT_MIME_TYPES = {PDF_MIME, DOCX_MIME, TXT_MIME}


def get_file_extension(filename: str) -> str:
    """Get lowercase file extension."""
    if '.' not in filename:
        return ''
    return '.' + filename.rsplit('.', 1)[1].lower()


async def read_upload(file: UploadFile) -> Tuple[bytes, str, str]:
    """
    Read and validate an uploaded resume file.

    Returns:
        Tuple of (content, filename, mime_type)

    Raises:
        HTTPException on validation errors
    """
    if not file.filename:
        raise HTTPException(status_code=400, detail="No filename provided")

    ext = get_file_extension(file.filename)
    if ext not in ALLOWED_EXTENSIONS:
        raise HTTPException(
            status_code=400,
            detail=f"Unsupported file type '{ext}'. Allowed: PDF, DOCX, TXT, PNG, JPG, WEBP"
        )

    content = await file.read()

    if len(content) > MAX_FILE_SIZE_BYTES:
        raise HTTPException(
            status_code=413,
            detail=f"File too large. Maximum size: {MAX_FILE_SIZE_MB}MB"
        )
    if not content:
        raise HTTPException(status_code=400, detail="Uploaded file is empty")

    return content, file.filename, MIME_TYPES[ext]


def extract_text(content: bytes, mime_type: str) -> str:
    """
    Extract text from a document by MIME type.

    Raises:
        ValueError for unsupported types or unreadable files
    """
    if mime_type == PDF_MIME:
        text = extract_from_pdf(content)
    elif mime_type == DOCX_MIME:
        text = extract_from_docx(content)
    elif mime_type == TXT_MIME:
        text = extract_from_txt(content)
    else:
        raise ValueError(f"Cannot extract text from '{mime_type}'")

    if not text.strip():
        raise ValueError("Could not extract text from file. File may be empty or corrupted.")
    return text


def extract_from_pdf(content: bytes) -> str:
    """Extract text from PDF bytes."""
    try:
        reader = PdfReader(io.BytesIO(content))
        text_parts = []
        for page in reader.pages:
            page_text = page.extract_text()
            if page_text:
                text_parts.append(page_text)
        return '\n'.join(text_parts)
    except Exception as e:
        raise ValueError(f"Error reading PDF: {e}") from e


def extract_from_docx(content: bytes) -> str:
    """Extract text from DOCX bytes."""
    try:
        doc = Document(io.BytesIO(content))
    except Exception as e:
        raise ValueError(f"Error reading DOCX: {e}") from e

    text_parts = []

    # Extract paragraphs
    for para in doc.paragraphs:
        if para.text.strip():
            text_parts.append(para.text)

    # Extract tables
    for table in doc.tables:
        for row in table.rows:
            row_text = [cell.text.strip() for cell in row.cells if cell.text.strip()]
            if row_text:
                text_parts.append(' | '.join(row_text))

    return '\n'.join(text_parts)


def extract_from_txt(content: bytes) -> str:
    """Extract text from TXT bytes."""
    for encoding in ['utf-8', 'cp1252']:
        try:
            return content.decode(encoding)
        except UnicodeDecodeError:
            continue
    # latin-1 maps every byte, so it never fails
    return content.decode('latin-1')


def get_supported_formats() -> dict:
    """Get info about supported file formats."""
    return {
        "supported_formats": [
            {"extension": ext, "mime_type": mime} for ext, mime in MIME_TYPES.items()
        ],
        "max_size_mb": MAX_FILE_SIZE_MB
    }
