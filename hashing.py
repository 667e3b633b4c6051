# hashing.py
# Algorithm dispatch, string/file hashing and result export.

from __future__ import annotations

import dataclasses
import enum
import hashlib
import json
import logging
import os
import typing as t

from functools import partial
from pathlib import Path

import blake3
from Crypto.Hash import keccak

import main
from constants import BUFFER_SIZE
from utils import (
    ExportError,
    HashMismatchError,
    UnsupportedAlgorithmError,
    compare_hex,
    ensure_bytes,
    normalize_hex,
)

if t.TYPE_CHECKING:
    import _typeshed as _t

logger = logging.getLogger(__name__)

DEFAULT_ALGORITHM: str = "sha256"


class Hasher(t.Protocol):
    """The streaming contract every algorithm satisfies."""

    def update(self, data: bytes, /) -> t.Any: ...
    def digest(self) -> bytes: ...
    def hexdigest(self) -> str: ...


class Algorithm(str, enum.Enum):
    MD5 = "md5"
    SHA1 = "sha1"
    SHA224 = "sha224"
    SHA256 = "sha256"
    SHA384 = "sha384"
    SHA512 = "sha512"
    SHA512_224 = "sha512-224"
    SHA512_256 = "sha512-256"
    SHA3_224 = "sha3-224"
    SHA3_256 = "sha3-256"
    SHA3_384 = "sha3-384"
    SHA3_512 = "sha3-512"
    BLAKE2B = "blake2b"
    BLAKE2S = "blake2s"
    BLAKE3 = "blake3"
    KECCAK224 = "keccak224"
    KECCAK256 = "keccak256"
    KECCAK384 = "keccak384"
    KECCAK512 = "keccak512"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def all(cls) -> list[Algorithm]:
        return list(cls)

    @classmethod
    def from_str(cls, name: t.Union[str, Algorithm]) -> Algorithm:
        if isinstance(name, cls):
            return name
        key = str(name).strip().lower()
        key = _ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            raise UnsupportedAlgorithmError(str(name)) from None

    @property
    def display_name(self) -> str:
        return _INFO[self][0]

    @property
    def description(self) -> str:
        return _INFO[self][1]

    @property
    def digest_size(self) -> int:
        return _INFO[self][2]


_ALIASES: dict[str, str] = {
    "sha512_224": "sha512-224",
    "sha512_256": "sha512-256",
    "sha3_224": "sha3-224",
    "sha3_256": "sha3-256",
    "sha3_384": "sha3-384",
    "sha3_512": "sha3-512",
    "blake2b512": "blake2b",
    "blake2s256": "blake2s",
}

# Algorithm -> (display name, description, digest size in bytes)
_INFO: dict[Algorithm, tuple[str, str, int]] = {
    Algorithm.MD5: ("MD5", "128-bit (insecure, legacy use only)", 16),
    Algorithm.SHA1: ("SHA-1", "160-bit (insecure, legacy use only)", 20),
    Algorithm.SHA224: ("SHA-224", "224-bit SHA-2", 28),
    Algorithm.SHA256: ("SHA-256", "256-bit SHA-2 (recommended)", 32),
    Algorithm.SHA384: ("SHA-384", "384-bit SHA-2", 48),
    Algorithm.SHA512: ("SHA-512", "512-bit SHA-2", 64),
    Algorithm.SHA512_224: ("SHA-512/224", "224-bit SHA-2 variant", 28),
    Algorithm.SHA512_256: ("SHA-512/256", "256-bit SHA-2 variant", 32),
    Algorithm.SHA3_224: ("SHA3-224", "224-bit SHA-3", 28),
    Algorithm.SHA3_256: ("SHA3-256", "256-bit SHA-3", 32),
    Algorithm.SHA3_384: ("SHA3-384", "384-bit SHA-3", 48),
    Algorithm.SHA3_512: ("SHA3-512", "512-bit SHA-3", 64),
    Algorithm.BLAKE2B: ("BLAKE2b", "512-bit BLAKE2b", 64),
    Algorithm.BLAKE2S: ("BLAKE2s", "256-bit BLAKE2s", 32),
    Algorithm.BLAKE3: ("BLAKE3", "256-bit BLAKE3 (fast, modern)", 32),
    Algorithm.KECCAK224: ("Keccak-224", "224-bit Keccak", 28),
    Algorithm.KECCAK256: ("Keccak-256", "256-bit Keccak", 32),
    Algorithm.KECCAK384: ("Keccak-384", "384-bit Keccak", 48),
    Algorithm.KECCAK512: ("Keccak-512", "512-bit Keccak", 64),
}

# Only SHA-1 is computed in-house, everything else comes from audited primitives.
_FACTORIES: dict[Algorithm, t.Callable[[], Hasher]] = {
    Algorithm.MD5: hashlib.md5,
    Algorithm.SHA1: main.sha1,
    Algorithm.SHA224: hashlib.sha224,
    Algorithm.SHA256: hashlib.sha256,
    Algorithm.SHA384: hashlib.sha384,
    Algorithm.SHA512: hashlib.sha512,
    Algorithm.SHA512_224: partial(hashlib.new, "sha512_224"),
    Algorithm.SHA512_256: partial(hashlib.new, "sha512_256"),
    Algorithm.SHA3_224: hashlib.sha3_224,
    Algorithm.SHA3_256: hashlib.sha3_256,
    Algorithm.SHA3_384: hashlib.sha3_384,
    Algorithm.SHA3_512: hashlib.sha3_512,
    Algorithm.BLAKE2B: hashlib.blake2b,
    Algorithm.BLAKE2S: hashlib.blake2s,
    Algorithm.BLAKE3: blake3.blake3,
    Algorithm.KECCAK224: partial(keccak.new, digest_bits=224),
    Algorithm.KECCAK256: partial(keccak.new, digest_bits=256),
    Algorithm.KECCAK384: partial(keccak.new, digest_bits=384),
    Algorithm.KECCAK512: partial(keccak.new, digest_bits=512),
}


def new(algorithm: t.Union[str, Algorithm], data: _t.ReadableBuffer = b"") -> Hasher:
    """Returns a fresh streaming hasher for *algorithm*, optionally primed with *data*."""
    algo = Algorithm.from_str(algorithm)
    hasher = _FACTORIES[algo]()
    logger.debug("new %s hasher: %r", algo, hasher)
    if data:
        hasher.update(ensure_bytes(data))
    return hasher


def hash_bytes(data: _t.ReadableBuffer, algorithm: t.Union[str, Algorithm]) -> str:
    return new(algorithm, ensure_bytes(data)).hexdigest()


def hash_string(text: str, algorithm: t.Union[str, Algorithm]) -> str:
    return hash_bytes(text.encode("utf-8"), algorithm)


def hash_file(
    path: t.Union[str, os.PathLike],
    algorithm: t.Union[str, Algorithm],
    buffer_size: int = BUFFER_SIZE,
) -> str:
    """Hashes the file at *path* reading *buffer_size* bytes at a time.

    I/O errors (missing file, permission denied, directory) are not
    caught here; they reach the caller as the original ``OSError``.
    """
    hasher = new(algorithm)
    total = 0
    with open(path, "rb") as fh:
        for chunk in iter(partial(fh.read, buffer_size), b""):
            hasher.update(chunk)
            total += len(chunk)
    logger.debug("hashed %s (%d bytes) with %s", path, total, Algorithm.from_str(algorithm))
    return hasher.hexdigest()


def verify(digest: str, expected: str) -> bool:
    return compare_hex(digest, expected)


def assert_digest(digest: str, expected: str) -> None:
    if not verify(digest, expected):
        raise HashMismatchError(normalize_hex(expected), normalize_hex(digest))


@dataclasses.dataclass(frozen=True)
class HashResult:
    """A digest together with what was hashed."""

    algorithm: str
    digest: str
    input_type: str
    input_path: t.Optional[str] = None

    @classmethod
    def new(cls, algorithm: t.Union[str, Algorithm], digest: str, input_type: str) -> HashResult:
        return cls(str(Algorithm.from_str(algorithm)), digest, input_type)

    def with_path(self, path: t.Union[str, os.PathLike]) -> HashResult:
        return dataclasses.replace(self, input_path=os.fspath(path))

    def to_dict(self) -> dict:
        return {k: v for k, v in dataclasses.asdict(self).items() if v is not None}

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)

    def to_text(self) -> str:
        return f"{self.digest} ({self.algorithm})"

    def to_checksum(self) -> str:
        """``sha256sum`` style line; the digest alone for string input."""
        if self.input_path is not None:
            return f"{self.digest}  {self.input_path}"
        return self.digest


def hash_input(
    value: str,
    algorithm: t.Union[str, Algorithm],
    force_string: bool = False,
) -> HashResult:
    """Hashes *value* as a file when such a path exists, otherwise as text."""
    algo = Algorithm.from_str(algorithm)
    if not force_string and os.path.exists(value):
        return HashResult.new(algo, hash_file(value, algo), "file").with_path(value)
    return HashResult.new(algo, hash_string(value, algo), "string")


class ExportFormat(str, enum.Enum):
    TEXT = "text"
    JSON = "json"
    CHECKSUM = "checksum"

    def __str__(self) -> str:
        return self.value


def _render(result: HashResult, fmt: ExportFormat) -> str:
    if fmt is ExportFormat.JSON:
        return result.to_json()
    if fmt is ExportFormat.CHECKSUM:
        return result.to_checksum()
    return result.digest


def _write(path: Path, content: str) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise ExportError(f"Failed to write to file: {path}: {exc}") from exc
    logger.debug("wrote %d characters to %s", len(content), path)


def export_result(
    result: HashResult,
    path: t.Union[str, os.PathLike],
    fmt: t.Union[str, ExportFormat] = ExportFormat.TEXT,
) -> Path:
    path = Path(path)
    _write(path, _render(result, ExportFormat(fmt)))
    return path


def export_results(
    results: t.Sequence[HashResult],
    path: t.Union[str, os.PathLike],
    fmt: t.Union[str, ExportFormat] = ExportFormat.TEXT,
) -> list[Path]:
    """Exports several results at once.

    JSON goes to *path* as a single list. Text and checksum formats write
    one file per result next to *path*, named ``<stem>.<algorithm>[<suffix>]``.
    """
    fmt = ExportFormat(fmt)
    path = Path(path)

    if fmt is ExportFormat.JSON:
        _write(path, json.dumps([r.to_dict() for r in results], indent=2))
        return [path]

    written: list[Path] = []
    for result in results:
        target = path.with_name(f"{path.stem}.{result.algorithm}{path.suffix}")
        _write(target, _render(result, fmt))
        written.append(target)
    return written


__all__: list = [
    "Algorithm",
    "DEFAULT_ALGORITHM",
    "ExportFormat",
    "HashResult",
    "Hasher",
    "assert_digest",
    "export_result",
    "export_results",
    "hash_bytes",
    "hash_file",
    "hash_input",
    "hash_string",
    "new",
    "verify",
]
