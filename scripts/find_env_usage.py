"""
환경 변수 사용처 검색

Usage:
    python scripts/find_env_usage.py JWT_SECRET

settings.NAME / os.getenv("NAME") / os.environ["NAME"] / os.environ.get("NAME")
형태의 참조를 .py 파일에서 찾아 출력한다. 주석은 무시한다.
"""

import os
import re
import sys
from pathlib import Path
from typing import List, Tuple

IGNORE_DIRS = {".git", ".venv", "venv", "env", "__pycache__", ".pytest_cache", "build", "dist"}


def build_pattern(name: str) -> re.Pattern:
    name = re.escape(name)
    return re.compile(
        rf"(\bsettings\.{name}\b"
        rf"|\bos\.getenv\(\s*['\"]{name}['\"]"
        rf"|\bos\.environ(?:\.get\(\s*|\[\s*)['\"]{name}['\"])"
    )


def strip_comment(line: str) -> str:
    # 문자열 안의 '#'까지 구분하지는 않음
    return line.split("#", 1)[0]


def iter_python_files(root: Path):
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if d not in IGNORE_DIRS)
        for filename in sorted(filenames):
            if filename.endswith(".py"):
                yield Path(dirpath) / filename


def find_usages(name: str, root: Path) -> List[Tuple[str, int, str]]:
    pattern = build_pattern(name)
    results = []
    for path in iter_python_files(root):
        try:
            lines = path.read_text(encoding="utf-8").splitlines()
        except (OSError, UnicodeDecodeError) as e:
            print(f"⚠️ Skipping unreadable file {path}: {e}", file=sys.stderr)
            continue
        for lineno, line in enumerate(lines, start=1):
            if pattern.search(strip_comment(line)):
                rel = path.relative_to(root).as_posix()
                results.append((rel, lineno, line.strip()))
    return results


def main():
    if len(sys.argv) < 2:
        print(
            "❌ Please provide an environment variable name, "
            "e.g.: python scripts/find_env_usage.py JWT_SECRET",
            file=sys.stderr,
        )
        sys.exit(1)

    name = sys.argv[1]
    root = Path(".").resolve()
    results = find_usages(name, root)

    if not results:
        print(f'❌ No usage found for environment variable "{name}"')
        return

    print(f'🔍 Found {len(results)} usage(s) of "{name}":\n')
    for rel, lineno, content in results:
        print(f"- {rel}:{lineno} → {content}")


if __name__ == "__main__":
    main()
