#!/usr/bin/env python3
"""
从 resource/feature_code_map.json 自动生成 inventory/utils/util_error_map.py

使用方法:
    python3 script/generate_error_map.py
"""

import json
import sys
from pathlib import Path


def message_to_name(message: str) -> str:
    """将消息转换为常量名称（UPPER_SNAKE_CASE）"""
    name = ''.join(c if c.isalnum() or c == ' ' else ' ' for c in message)
    name = ' '.join(name.split())
    return name.upper().replace(' ', '_').rstrip('_')


def escape_message(message: str) -> str:
    return message.replace('"', '\\"')


def get_project_root() -> Path:
    return Path(__file__).parent.absolute().parent


def extract_errors(feature_data: dict) -> list:
    """展开 routers -> errors 为扁平列表"""
    errors = []
    for router in feature_data.get("routers", []):
        router_code = router.get("router_code", "")
        for error in router.get("errors", []):
            errors.append({
                "code": int(error["error_code"]),
                "message": error["error_message"],
                "router_code": router_code,
            })
    return sorted(errors, key=lambda x: x["code"])


def render_error_map(error_list: list) -> str:
    code_lines = ["ERROR_CODE_TO_MESSAGE = {"]
    name_lines = ["ERROR_NAME_TO_CODE = {"]
    for item in error_list:
        code_lines.append(f"    {item['code']}: \"{escape_message(item['message'])}\",")
        name = message_to_name(item["message"])
        # 名称统一带上 router_code，避免不同路由间重名
        if item["router_code"]:
            name = f"{name}_{item['router_code']}"
        name_lines.append(f"    \"{name}\": {item['code']},")
    code_lines.append("}")
    name_lines.append("}")

    return f'''"""
Inventory 服务错误码和错误消息定义

此文件由 script/generate_error_map.py 自动生成
如需修改错误码或消息，请编辑 resource/feature_code_map.json 后运行生成脚本

生成命令:
    python3 script/generate_error_map.py
"""
from typing import Optional

{chr(10).join(code_lines)}


{chr(10).join(name_lines)}


class _ServerErrorCode:
    def __getattr__(self, name: str) -> int:
        if name in ERROR_NAME_TO_CODE:
            return ERROR_NAME_TO_CODE[name]
        raise AttributeError(f"{{self.__class__.__name__}} has no attribute '{{name}}'")


class _ServerErrorMessage:
    def __getattr__(self, name: str) -> str:
        if name in ERROR_NAME_TO_CODE:
            return ERROR_CODE_TO_MESSAGE[ERROR_NAME_TO_CODE[name]]
        raise AttributeError(f"{{self.__class__.__name__}} has no attribute '{{name}}'")


ServerErrorCode = _ServerErrorCode()
ServerErrorMessage = _ServerErrorMessage()

# 客户端据此判断「实体不存在」类错误
NOT_FOUND_CODES = frozenset(
    code for name, code in ERROR_NAME_TO_CODE.items() if "NOT_FOUND" in name
)


def get_error_code_from_message(message: str) -> Optional[int]:
    for code, msg in ERROR_CODE_TO_MESSAGE.items():
        if msg == message:
            return code
    return None
'''


def main():
    project_root = get_project_root()
    json_path = project_root / "resource" / "feature_code_map.json"
    output_path = project_root / "inventory" / "utils" / "util_error_map.py"

    if not json_path.exists():
        print(f"错误: 找不到 JSON 文件: {json_path}", file=sys.stderr)
        sys.exit(1)

    try:
        with open(json_path, 'r', encoding='utf-8') as f:
            feature_data = json.load(f)
    except json.JSONDecodeError as e:
        print(f"错误: JSON 文件格式错误: {e}", file=sys.stderr)
        sys.exit(1)

    error_list = extract_errors(feature_data)
    print(f"[DEBUG] 共 {len(error_list)} 个错误", file=sys.stderr)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, 'w', encoding='utf-8') as f:
        f.write(render_error_map(error_list))

    print(f"✓ 成功生成: {output_path}")
    print(f"  从 JSON 文件: {json_path}")


if __name__ == "__main__":
    main()
