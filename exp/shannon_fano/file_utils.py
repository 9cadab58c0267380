#!/usr/bin/env python3
import json
import os
from typing import Dict


EXIT_USAGE = 1
EXIT_MISSING = 2
EXIT_OPEN_READ = 3
EXIT_READ = 4
EXIT_OPEN_WRITE = 5
EXIT_WRITE = 6
EXIT_MISMATCH = 7

COMPRESSED_SUFFIX = ".compressed"
UNCOMPRESSED_SUFFIX = ".uncompressed"
CODEBOOK_SUFFIX = ".codebook.json"


class FileAccessError(Exception):
    def __init__(self, message: str, exit_code: int) -> None:
        super().__init__(message)
        self.exit_code = exit_code


def read_file(path: str) -> bytes:
    if not os.path.exists(path):
        raise FileAccessError(f'File "{path}" does not exist', EXIT_MISSING)
    try:
        f = open(path, "rb")
    except OSError as exc:
        raise FileAccessError(f'Unable to open file "{path}"', EXIT_OPEN_READ) from exc
    with f:
        try:
            return f.read()
        except OSError as exc:
            raise FileAccessError(f'Unable to read file "{path}"', EXIT_READ) from exc


def write_file(path: str, data: bytes) -> None:
    try:
        f = open(path, "wb")
    except OSError as exc:
        raise FileAccessError(f'Unable to open file "{path}"', EXIT_OPEN_WRITE) from exc
    with f:
        try:
            f.write(data)
        except OSError as exc:
            raise FileAccessError(f'Unable to write file "{path}"', EXIT_WRITE) from exc


def load_json(path: str) -> Dict:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def write_json(path: str, payload: Dict) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, ensure_ascii=False)
