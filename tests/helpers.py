"""Shared fixtures for building artifact trees on disk."""

from __future__ import annotations

import io
import struct
import zipfile
from pathlib import Path

PAGE = "<!DOCTYPE html>\n<html>\n<head>\n<title>{title}</title>\n</head>\n<body></body>\n</html>\n"


def write_javadoc_jar(path: Path, title: str = "lib") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(path, "w") as zf:
        zf.writestr("index.html", PAGE.format(title=title))
        zf.writestr("com/acme/Lib.html", PAGE.format(title=f"{title} Lib"))
        zf.writestr("stylesheet.css", "body { margin: 0; }\n")
    return path


def write_file(path: Path, content: bytes | str = b"") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, str):
        path.write_text(content, encoding="utf-8")
    else:
        path.write_bytes(content)
    return path


def build_repository(root: Path) -> Path:
    """A small repository: one library with javadoc and a changelog."""
    version = root / "com" / "acme" / "lib" / "1.0"
    write_file(version / "lib-1.0.jar", b"x" * 1536)
    write_file(version / "lib-1.0.pom", "<project/>\n")
    write_javadoc_jar(version / "lib-1.0-javadoc.jar")
    write_file(root / "com" / "acme" / "lib" / "changelog", "https://example.com/lib/CHANGELOG.md\n")
    write_file(root / "README.md", "# repo\n")
    write_file(root / "_config.yml", "theme: minima\n")
    write_file(root / "scripts" / "build.sh", "#!/bin/sh\n")
    return root


def _javadoc_bytes() -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        zf.writestr("index.html", PAGE.format(title="lib") * 20)
    return buffer.getvalue()


def write_corrupt_payload_jar(path: Path) -> Path:
    """A jar with a valid directory whose deflate data is garbage."""
    data = bytearray(_javadoc_bytes())
    info = zipfile.ZipFile(io.BytesIO(bytes(data))).infolist()[0]
    name_len, extra_len = struct.unpack("<HH", data[info.header_offset + 26 : info.header_offset + 30])
    start = info.header_offset + 30 + name_len + extra_len
    data[start : start + info.compress_size] = b"\xff" * info.compress_size
    return write_file(path, bytes(data))


def write_encrypted_jar(path: Path) -> Path:
    """A jar whose only entry is flagged as encrypted."""
    data = bytearray(_javadoc_bytes())
    central = data.index(b"PK\x01\x02")
    data[central + 8] |= 0x01
    return write_file(path, bytes(data))
