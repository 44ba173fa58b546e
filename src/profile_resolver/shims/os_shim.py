"""File system and environment shims.

Providers never touch ``os.environ`` or the disk directly; they go through
these shims so tests can substitute in-memory or fixture-directory backed
versions.
"""

import asyncio
import os
from pathlib import Path, PurePosixPath
from typing import Mapping


class Env:
    """Read-only view of environment variables."""

    def __init__(self, variables: Mapping[str, str] | None = None):
        # None means "read the live process environment"
        self._variables = dict(variables) if variables is not None else None

    @classmethod
    def real(cls) -> "Env":
        return cls()

    @classmethod
    def from_mapping(cls, variables: Mapping[str, str]) -> "Env":
        return cls(variables)

    def get(self, key: str) -> str | None:
        if self._variables is None:
            return os.environ.get(key)
        return self._variables.get(key)

    def __repr__(self) -> str:
        if self._variables is None:
            return "Env(real)"
        return f"Env({sorted(self._variables)})"


class Fs:
    """Read-only file system access.

    Three backends are supported:
    - the real file system
    - an in-memory mapping of path to contents
    - a test directory mounted at a virtual prefix
    """

    def __init__(
        self,
        files: Mapping[str, str | bytes] | None = None,
        test_dir: Path | None = None,
        namespaced_to: str = "/",
    ):
        self._files: dict[str, bytes] | None = None
        if files is not None:
            self._files = {
                str(PurePosixPath(path)): data.encode() if isinstance(data, str) else data
                for path, data in files.items()
            }
        self._test_dir = test_dir
        self._namespaced_to = PurePosixPath(namespaced_to)

    @classmethod
    def real(cls) -> "Fs":
        return cls()

    @classmethod
    def from_mapping(cls, files: Mapping[str, str | bytes]) -> "Fs":
        return cls(files=files)

    @classmethod
    def from_test_dir(cls, test_dir: Path | str, namespaced_to: str = "/") -> "Fs":
        """Serve files from ``test_dir`` as if it were mounted at ``namespaced_to``.

        With ``namespaced_to="/"``, reading ``/home/.aws/config`` returns
        ``<test_dir>/home/.aws/config``.
        """
        return cls(test_dir=Path(test_dir), namespaced_to=namespaced_to)

    async def read_to_end(self, path: str | Path) -> bytes:
        """Read the full contents of a file.

        Raises:
            FileNotFoundError: If the file does not exist
        """
        if self._files is not None:
            key = str(PurePosixPath(path))
            if key not in self._files:
                raise FileNotFoundError(f"No such file: {path}")
            return self._files[key]

        return await asyncio.to_thread(self._resolve(path).read_bytes)

    def _resolve(self, path: str | Path) -> Path:
        if self._test_dir is None:
            return Path(path)

        virtual = PurePosixPath(path)
        try:
            relative = virtual.relative_to(self._namespaced_to)
        except ValueError:
            raise FileNotFoundError(f"{path} is outside of {self._namespaced_to}") from None
        return self._test_dir / relative

    def __repr__(self) -> str:
        if self._files is not None:
            return f"Fs({sorted(self._files)})"
        if self._test_dir is not None:
            return f"Fs({self._test_dir} -> {self._namespaced_to})"
        return "Fs(real)"
