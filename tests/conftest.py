import os
import sys
from pathlib import Path

project_root = Path(__file__).resolve().parents[1]
src_path = project_root / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

os.environ.setdefault("BALLSVILLE_STORAGE_BACKEND", "memory")
os.environ.setdefault("ADMIN_EMAILS", "commish@ballsville.test")

if "ballsville" in sys.modules:
    for name in list(sys.modules):
        if name == "ballsville" or name.startswith("ballsville."):
            del sys.modules[name]
