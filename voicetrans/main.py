#!/usr/bin/env python3
"""
voicetrans メインエントリーポイント
コマンドラインから自動フォールバック付き翻訳を実行する
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from voicetrans.core.question_detector import is_question
from voicetrans.core.settings_manager import SettingsManager, get_settings_manager
from voicetrans.core.translate import TranslationService


def setup_logging(verbose: bool = False, log_file: Optional[Path] = None) -> logging.Logger:
    """
    ロギング設定
    """
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers,
        force=True,
    )

    logger = logging.getLogger(__name__)
    logger.info("=== voicetrans ログ開始 ===")
    logger.info(f"Python version: {sys.version}")
    if log_file is not None:
        logger.info(f"Log file: {log_file}")

    return logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="voicetrans",
        description="複数の翻訳サービスを自動で切り替えてテキストを翻訳します",
    )
    parser.add_argument("text", nargs="?", help="翻訳するテキスト（省略時は標準入力）")
    parser.add_argument("--source", help="翻訳元の言語コード（例: en）")
    parser.add_argument("--target", help="翻訳先の言語コード（例: uk）")
    parser.add_argument("--config", type=Path, help="設定ファイルのパス")
    parser.add_argument(
        "--disable",
        action="append",
        default=[],
        metavar="PROVIDER",
        help="使用しない翻訳プロバイダー（複数指定可）",
    )
    parser.add_argument("--status", action="store_true", help="プロバイダーの状態を表示")
    parser.add_argument("--show-log", action="store_true", help="翻訳イベントログを表示")
    parser.add_argument("--verbose", "-v", action="store_true", help="詳細ログを出力")
    parser.add_argument("--log-file", type=Path, help="ログファイルの出力先")
    return parser


def print_status(service: TranslationService):
    print("プロバイダー状態:")
    for status in service.get_provider_status():
        enabled = "有効" if status.enabled else "無効"
        failed = " (制限中)" if status.failed else ""
        print(f"  {status.priority}: {status.identifier} [{enabled}]{failed}")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logger = setup_logging(args.verbose, args.log_file)

    manager = SettingsManager(args.config) if args.config else get_settings_manager()
    settings = manager.load_settings()

    errors = manager.validate_settings(settings)
    if errors:
        for error in errors:
            print(f"設定エラー: {error}", file=sys.stderr)
        return 2

    service = TranslationService.from_settings(settings)
    for identifier in args.disable:
        try:
            service.set_provider_enabled(identifier, False)
        except ValueError as e:
            print(f"エラー: {e}", file=sys.stderr)
            return 2

    text = args.text if args.text is not None else sys.stdin.read().rstrip("\n")
    source_language = args.source or settings.languages.source_language
    target_language = args.target or settings.languages.target_language

    result = service.translate(text, source_language, target_language)
    logger.debug(f"翻訳結果: {result.to_dict()}")

    exit_code = 0
    if result.succeeded:
        print(result.text)
        print(f"翻訳完了 ({result.provider_id})", file=sys.stderr)
        if is_question(text):
            print("質問が検出されました", file=sys.stderr)
    else:
        print("翻訳するテキストがありません", file=sys.stderr)
        exit_code = 1

    if args.status:
        print_status(service)

    if args.show_log:
        for record in service.get_log_snapshot():
            print(record.format_line())

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
