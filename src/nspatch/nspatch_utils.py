"""
This file contains various utility functions like I/O operations, handling properties files, etc.
"""

import logging
import os
import platform
from typing import Dict

from nspatch.nspatch_exceptions import NspatchException
from nspatch.nspatch_logger import NspatchLogger


class FileUtils:
    """
    Utility functions for file operations.
    """

    @staticmethod
    def read_file(logger: NspatchLogger, file_path: str) -> str:
        """
        Reads the file at the given path and returns the contents as a string.

        Line endings are kept as they are on disk.
        """
        try:
            with open(file_path, "r", encoding="utf-8", newline="") as inp_file:
                return inp_file.read()
        except OSError as exc:
            logger.log(f"File read '{file_path}' failed: {exc}", logging.ERROR)
            raise NspatchException(f"File read '{file_path}' failed.") from exc
        except UnicodeDecodeError as exc:
            logger.log(f"File read '{file_path}' failed: {exc}", logging.ERROR)
            raise NspatchException(f"File '{file_path}' is not valid UTF-8.") from exc

    @staticmethod
    def write_file(logger: NspatchLogger, file_path: str, content: str) -> None:
        """
        Overwrites the file at the given path with the given contents.
        """
        try:
            with open(file_path, "w", encoding="utf-8", newline="") as out_file:
                out_file.write(content)
        except OSError as exc:
            logger.log(f"File write '{file_path}' failed: {exc}", logging.ERROR)
            raise NspatchException(f"File write '{file_path}' failed.") from exc


class PropertiesUtils:
    """
    Reader for Java .properties files such as Gradle's local.properties.
    """

    _ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}

    @staticmethod
    def parse(content: str) -> Dict[str, str]:
        """
        Parses the contents of a .properties file into a dict.
        """
        properties: Dict[str, str] = {}
        logical_line = ""
        for raw_line in content.splitlines():
            line = raw_line.lstrip()
            if not logical_line and (not line or line[0] in "#!"):
                continue

            # An odd number of trailing backslashes continues the line
            trailing = len(line) - len(line.rstrip("\\"))
            if trailing % 2 == 1:
                logical_line += line[:-1]
                continue

            logical_line += line
            key, value = PropertiesUtils._split(logical_line)
            properties[key] = value
            logical_line = ""

        if logical_line:
            key, value = PropertiesUtils._split(logical_line)
            properties[key] = value

        return properties

    @staticmethod
    def _split(line: str):
        i = 0
        while i < len(line):
            c = line[i]
            if c == "\\":
                i += 2
                continue
            if c in "=: \t\f":
                break
            i += 1

        key = line[:i]
        rest = line[i:].lstrip(" \t\f")
        if rest[:1] in ("=", ":"):
            rest = rest[1:].lstrip(" \t\f")

        return PropertiesUtils._unescape(key), PropertiesUtils._unescape(rest)

    @staticmethod
    def _unescape(text: str) -> str:
        out = []
        i = 0
        while i < len(text):
            c = text[i]
            if c != "\\" or i + 1 >= len(text):
                out.append(c)
                i += 1
                continue

            nxt = text[i + 1]
            if nxt == "u" and i + 6 <= len(text):
                try:
                    out.append(chr(int(text[i + 2:i + 6], 16)))
                    i += 6
                    continue
                except ValueError:
                    pass
            out.append(PropertiesUtils._ESCAPES.get(nxt, nxt))
            i += 2

        return "".join(out)

    @staticmethod
    def read(logger: NspatchLogger, file_path: str) -> Dict[str, str]:
        """
        Reads and parses the .properties file at the given path.
        """
        return PropertiesUtils.parse(FileUtils.read_file(logger, file_path))


class PlatformUtils:
    """
    This class provides utilities for platform detection.
    """

    @staticmethod
    def is_windows() -> bool:
        """
        Returns True when running on Windows.
        """
        return platform.system() == "Windows" or os.name == "nt"
