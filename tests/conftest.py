import os
import sys


def pytest_configure():
    # Put `src/` on the path so `common`, `state`, `sync` and `presentation`
    # import as top-level packages without an install
    root = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))
    src_path = os.path.join(root, "src")
    if src_path not in sys.path:
        sys.path.insert(0, src_path)
