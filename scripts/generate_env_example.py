"""Settings 필드로부터 .env.example 생성 (필수 항목은 주석으로 표시)"""

import os
import sys
from pathlib import Path

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from currencyapi.config import REQUIRED_SETTINGS, Settings

OUTPUT_PATH = Path(".env.example")


def render_env_example() -> str:
    lines = []
    for name, field in Settings.model_fields.items():
        if name in REQUIRED_SETTINGS:
            lines.append("# required")
            lines.append(f"{name}=")
            continue
        default = field.default
        lines.append(f"{name}={'' if default is None else default}")
    return "\n".join(lines) + "\n"


def main():
    output = Path(sys.argv[1]) if len(sys.argv) > 1 else OUTPUT_PATH
    content = render_env_example()
    output.write_text(content, encoding="utf-8")
    print(f"✅ Wrote {len(Settings.model_fields)} settings to {output}")


if __name__ == "__main__":
    main()
