"""Materialize decoded source bundles on disk."""

import logging
from pathlib import Path, PurePosixPath
from typing import Dict, List

from ..errors import UnsafePathError
from ..models import MultiFile, SingleFile, SourceBundle

logger = logging.getLogger(__name__)

RAW_RESPONSE_FILENAME = "raw.json"
IMPLEMENTATION_DIRNAME = "implementation"
RELOCATED_SOURCES_DIRNAME = "sources"

RESERVED_NAMES = {RAW_RESPONSE_FILENAME, IMPLEMENTATION_DIRNAME}


def _write_text(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    try:
        path.write_text(content, encoding="utf-8")
    except UnicodeEncodeError:
        path.write_text(content, encoding="utf-8", errors="backslashreplace")


class FileTreeWriter:
    """
    Writes one OutputTree directory.

    Writes are idempotent: rerunning over an existing tree overwrites files
    in place. The raw response is always written first so it survives any
    later failure.
    """

    def write(self, base_dir: Path, bundle: SourceBundle, raw_response: str) -> List[Path]:
        """
        Write the audit file and the bundle's source files under base_dir.

        Args:
            base_dir: Directory for this contract
            bundle: Decoded source bundle
            raw_response: Verbatim explorer response body

        Returns:
            Paths written, audit file first

        Raises:
            UnsafePathError: If a bundled path escapes base_dir
        """
        base_dir = Path(base_dir)
        base_dir.mkdir(parents=True, exist_ok=True)

        raw_path = base_dir / RAW_RESPONSE_FILENAME
        _write_text(raw_path, raw_response)
        written = [raw_path]

        if isinstance(bundle, MultiFile):
            files = bundle.files
        elif isinstance(bundle, SingleFile):
            files = {bundle.name: bundle.content}
        else:
            return written

        # Resolve every target before writing so a bad path leaves no partial tree
        targets = self._resolve_targets(base_dir, files)
        for target, content in targets:
            _write_text(target, content)
            written.append(target)

        logger.debug(f"Wrote {len(targets)} source file(s) under {base_dir}")
        return written

    def _resolve_targets(self, base_dir: Path, files: Dict[str, str]) -> List[tuple]:
        root = base_dir.resolve()
        targets = []
        for rel_str, content in files.items():
            rel = self.safe_relpath(rel_str)
            if rel.parts[0] in RESERVED_NAMES:
                logger.warning(f"Source path {rel_str!r} collides with an output name, writing it under {RELOCATED_SOURCES_DIRNAME}/")
                rel = PurePosixPath(RELOCATED_SOURCES_DIRNAME) / rel

            target = (root / Path(*rel.parts)).resolve()
            if target == root or not target.is_relative_to(root):
                raise UnsafePathError(f"Source path escapes output directory: {rel_str!r}")
            targets.append((target, content))

        # A path may not be both a file and a directory of the tree
        files_in_bundle = {target for target, _ in targets}
        for target, _ in targets:
            for parent in target.relative_to(root).parents:
                directory = root / parent
                if directory == root:
                    continue
                if directory in files_in_bundle or (directory.exists() and not directory.is_dir()):
                    raise UnsafePathError(f"Source path {target.relative_to(root).as_posix()!r} needs {parent.as_posix()!r} as a directory, but it is a file")
            if target.is_dir():
                raise UnsafePathError(f"Source path {target.relative_to(root).as_posix()!r} is an existing directory")
        return targets

    @staticmethod
    def safe_relpath(path_str: str) -> PurePosixPath:
        """Normalize separators and strip leading slashes from a bundled path."""
        rel = PurePosixPath(path_str.replace("\\", "/").lstrip("/"))
        if str(rel) in ("", "."):
            raise UnsafePathError(f"Empty source path: {path_str!r}")
        if ".." in rel.parts:
            raise UnsafePathError(f"Source path escapes output directory: {path_str!r}")
        return rel
