import os
import stat
import tempfile
from pathlib import Path

def default_file_mode() -> int:
    """The mode a plain `open(path, 'w')` would give a new file."""
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask

def atomic_write_text(path: Path, text: str) -> None:
    """
    Writes text to a file atomically using a temporary file.

    Symlinks are followed so the link itself survives, an existing file
    keeps its mode and new files get the umask default. Paths that are not
    regular files (e.g. /dev/null) are written in place. The parent
    directory must already exist.
    """
    path = Path(os.path.realpath(path))
    if path.exists() and not path.is_file():
        with open(path, 'w', encoding='utf-8') as f:
            f.write(text)
        return

    mode = stat.S_IMODE(path.stat().st_mode) if path.exists() else default_file_mode()
    fd, temp_path = tempfile.mkstemp(dir=path.parent, prefix=f"{path.name}.tmp")
    try:
        os.fchmod(fd, mode)
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            f.write(text)
        os.replace(temp_path, path)
    except Exception:
        if os.path.exists(temp_path):
            os.remove(temp_path)
        raise
