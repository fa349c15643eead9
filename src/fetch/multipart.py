"""multipart/form-data encoding for storage uploads.

The storage server only treats a part as a file when its Content-Disposition
carries a ``filename`` parameter, even an empty one. httpx drops empty
filenames, so upload bodies are encoded here and sent as raw content.
"""

import re
import uuid


_CRLF = "\r\n"

# HTML5 form encoding for quoted parameter values
_FORM_ESCAPES = {chr(c): f"%{c:02X}" for c in range(0x20) if c != 0x1B}
_FORM_ESCAPES['"'] = "%22"
_FORM_ESCAPES["\\"] = "\\\\"
_FORM_ESCAPE_RE = re.compile("|".join(re.escape(c) for c in _FORM_ESCAPES))


def quote_form_param(value: str) -> str:
    """Escape a value for use inside a quoted Content-Disposition parameter."""
    return _FORM_ESCAPE_RE.sub(lambda m: _FORM_ESCAPES[m.group(0)], value)


def encode_multipart(
    fields: dict[str, str],
    file_field: str,
    filename: str,
    payload: bytes,
    content_type: str,
) -> tuple[bytes, str]:
    """Encode text fields followed by a single file part.

    Args:
        fields: Text fields, in order.
        file_field: Form field name of the file part.
        filename: Declared filename; emitted even when empty.
        payload: File content.
        content_type: Content type of the file part.

    Returns:
        Tuple of (body, boundary).
    """
    boundary = "----storage-fetch-" + uuid.uuid4().hex
    parts: list[bytes] = []

    for name, value in fields.items():
        parts.append(f"--{boundary}{_CRLF}".encode())
        parts.append(
            f'Content-Disposition: form-data; name="{quote_form_param(name)}"'
            f"{_CRLF}{_CRLF}".encode()
        )
        parts.append(value.encode("utf-8"))
        parts.append(_CRLF.encode())

    parts.append(f"--{boundary}{_CRLF}".encode())
    parts.append(
        f'Content-Disposition: form-data; name="{quote_form_param(file_field)}"; '
        f'filename="{quote_form_param(filename)}"{_CRLF}'.encode()
    )
    parts.append(f"Content-Type: {content_type}{_CRLF}{_CRLF}".encode())
    parts.append(payload)
    parts.append(_CRLF.encode())
    parts.append(f"--{boundary}--{_CRLF}".encode())

    return b"".join(parts), boundary


def multipart_content_type(boundary: str) -> str:
    """Content-Type header value for a multipart body."""
    return f"multipart/form-data; boundary={boundary}"
