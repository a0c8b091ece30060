"""
Augmentor 命令行工具

使用方式:
    augmentor validate flow.json          # 校验流程，输出步骤总数
    augmentor validate flow.yaml --yaml   # 校验 YAML 流程
    augmentor format flow.json            # 输出规范化后的流程 JSON
    augmentor serve --port 8080           # 启动流程服务
"""

import argparse
import logging
import sys
from pathlib import Path

from augmentor.config import get_config
from augmentor.flows import FlowParser, ParseResult, to_source
from augmentor.logger import LogConfig, LogLevel, setup_logging

logger = logging.getLogger(__name__)


def _read_source(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def _parse(args) -> ParseResult:
    parser = FlowParser(get_config().limits)
    source = _read_source(args.file)
    use_yaml = args.yaml or Path(args.file).suffix.lower() in (".yaml", ".yml")
    return parser.parse_yaml(source) if use_yaml else parser.parse(source)


def cmd_validate(args) -> int:
    """校验流程"""
    result = _parse(args)
    if result.error:
        print(result.error, file=sys.stderr)
        return 1
    if result.definition is None:
        print("No flow configured.")
        return 0
    print(f"OK: {result.definition.step_count} steps")
    return 0


def cmd_format(args) -> int:
    """输出规范化后的流程"""
    result = _parse(args)
    if result.error:
        print(result.error, file=sys.stderr)
        return 1
    if result.definition is None:
        return 0
    print(to_source(result.definition, indent=args.indent))
    return 0


def cmd_serve(args) -> int:
    """启动流程服务"""
    import uvicorn
    from augmentor.api.app import create_app

    config = get_config()
    host = args.host or config.server.host
    port = args.port or config.server.port

    logger.info(f"启动流程服务: http://{host}:{port}")
    uvicorn.run(
        create_app(config),
        host=host,
        port=port,
        log_level=config.log.level.value.lower(),
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="augmentor",
        description="Augmentor 动作流工具",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
示例:
    augmentor validate flow.json
    augmentor format flow.yaml
    augmentor serve --host 0.0.0.0 --port 3000
        """,
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="日志级别 (默认: 读取 LOG_LEVEL)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    validate = subparsers.add_parser("validate", help="校验流程文件")
    validate.add_argument("file", help="流程文件路径，- 表示标准输入")
    validate.add_argument("--yaml", action="store_true", help="按 YAML 解析")
    validate.set_defaults(handler=cmd_validate)

    fmt = subparsers.add_parser("format", help="输出规范化后的流程 JSON")
    fmt.add_argument("file", help="流程文件路径，- 表示标准输入")
    fmt.add_argument("--yaml", action="store_true", help="按 YAML 解析")
    fmt.add_argument("--indent", type=int, default=2, help="缩进 (默认: 2)")
    fmt.set_defaults(handler=cmd_format)

    serve = subparsers.add_parser("serve", help="启动流程服务")
    serve.add_argument("--host", type=str, default=None, help="监听地址 (默认: SERVER_HOST 或 127.0.0.1)")
    serve.add_argument("--port", type=int, default=None, help="监听端口 (默认: SERVER_PORT 或 8080)")
    serve.set_defaults(handler=cmd_serve)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    log_config = LogConfig.from_settings(get_config().log)
    if args.log_level:
        log_config.level = LogLevel[args.log_level]
    setup_logging(log_config)

    try:
        return args.handler(args)
    except OSError as e:
        print(f"无法读取文件: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
