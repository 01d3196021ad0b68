#!/usr/bin/env python3
"""
twcss-merge CLI — Tailwind 4 樣式表 @import / @theme 合併

  python -m twcss_merge.cli add-import assets/css/app.css       # 加入 vendor @import
  python -m twcss_merge.cli sync --theme theme.css [--dry-run]   # @import + @theme
  python -m twcss_merge.cli check assets/css/app.css            # 是否已匯入
  python -m twcss_merge.cli validate assets/css/app.css         # 檢查 @import 順序
  python -m twcss_merge.cli watch --theme theme.css             # theme 變更時自動 sync
  python -m twcss_merge.cli init [--force]                      # 建立範例設定檔
  python -m twcss_merge.cli show                                # 顯示實際生效的設定
"""

import argparse
import difflib
import os
import sys
import time
from typing import Optional

from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

from twcss_merge import __version__

from .config import (
    DEFAULT_CONFIG_PATH,
    MergeSettings,
    load_config,
    resolve_settings,
    write_sample_config,
)
from .directives import validate_tailwind_structure
from .import_detector import import_already_exists
from .loader import NotFound
from .merger import AlreadyExists, add_import, sync_stylesheet


def _read_stylesheet(path: str) -> Optional[str]:
    try:
        # newline="" 保留原本的 \r\n
        with open(path, "r", encoding="utf-8", newline="") as f:
            return f.read()
    except FileNotFoundError:
        print(f"   ❌ 找不到樣式表 '{path}'，請確認路徑或設定 stylesheet.path。")
    except (OSError, UnicodeDecodeError) as e:
        print(f"   ❌ 無法讀取樣式表 '{path}': {e}")
    return None


def _print_diff(path: str, before: str, after: str) -> None:
    diff = difflib.unified_diff(
        before.splitlines(keepends=True),
        after.splitlines(keepends=True),
        fromfile=f"{path} (before)",
        tofile=f"{path} (after)",
    )
    for line in diff:
        sys.stdout.write(line if line.endswith("\n") else line + "\n")


def _write_stylesheet(path: str, before: str, after: str, dry_run: bool) -> None:
    if after == before:
        print(f"   ✅ {path} already up to date")
        return
    if dry_run:
        _print_diff(path, before, after)
        print(f"   [DRY-RUN] Would write to {path}")
        return
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(after)
    print(f"   ✅ Written to {path}")


def run_sync(settings: MergeSettings, dry_run: bool = False) -> int:
    """讀取樣式表與 theme 檔，合併後寫回；回傳 exit code."""
    if not settings.theme_file:
        print("   ❌ 請使用 --theme 或在 config 的 theme.file 設定 theme 原始檔。")
        return 1
    css = _read_stylesheet(settings.stylesheet)
    if css is None:
        return 1

    result = sync_stylesheet(css, settings.import_path, settings.theme_file, settings.introducer)
    if isinstance(result, NotFound):
        print(f"   ❌ 無法讀取 theme 檔：{result.describe()}")
        print(f"   ℹ️  {settings.stylesheet} 未被修改。")
        return 1

    _write_stylesheet(settings.stylesheet, css, result.text, dry_run)
    return 0


def cmd_add_import(args, config: dict) -> int:
    """Add import: 只確保 @import 存在."""
    settings = resolve_settings(config, args)
    print(f"📥 Adding @import \"{settings.import_path}\" to {settings.stylesheet}")

    css = _read_stylesheet(settings.stylesheet)
    if css is None:
        return 1

    result = add_import(css, settings.import_path)
    if isinstance(result, AlreadyExists):
        print("   ✅ Import already exists, nothing to do.")
        return 0
    _write_stylesheet(settings.stylesheet, css, result.text, args.dry_run)
    return 0


def cmd_sync(args, config: dict) -> int:
    """Sync: 確保 @import 存在並把 theme 區塊更新為 theme 檔內容."""
    settings = resolve_settings(config, args)
    print(f"🔄 Syncing {settings.stylesheet}")
    print(f"   import: {settings.import_path}")
    print(f"   theme:  {settings.theme_file or '(not set)'}")
    return run_sync(settings, dry_run=args.dry_run)


def cmd_check(args, config: dict) -> int:
    """Check: 回報 @import 是否已存在（存在 exit 0，否則 exit 1）."""
    settings = resolve_settings(config, args)
    css = _read_stylesheet(settings.stylesheet)
    if css is None:
        return 1
    if import_already_exists(css, settings.import_path):
        print(f"   ✅ {settings.stylesheet} imports \"{settings.import_path}\"")
        return 0
    print(f"   ⚠️  {settings.stylesheet} does not import \"{settings.import_path}\"")
    return 1


def cmd_validate(args, config: dict) -> int:
    """Validate: 檢查框架 @import 是否排在最前面."""
    settings = resolve_settings(config, args)
    css = _read_stylesheet(settings.stylesheet)
    if css is None:
        return 1
    errors = validate_tailwind_structure(css, settings.framework_import)
    if not errors:
        print(f"   ✅ {settings.stylesheet} structure is valid")
        return 0
    print(f"   ❌ {settings.stylesheet} has {len(errors)} structural issue(s):")
    for error in errors:
        print(f"     - {error}")
    return 1


def cmd_init(args, config: dict) -> int:
    """Init: 寫出範例設定檔，已存在時需加 --force 才覆寫."""
    existed = os.path.exists(args.config)
    if not write_sample_config(args.config, force=args.force):
        print(f"   ⚠️  設定檔已存在：{args.config}")
        print("   ℹ️  如需以範例覆寫，請使用 init --force")
        return 1
    if existed:
        print(f"   ✅ Overwrote {args.config} with a fresh sample")
    else:
        print(f"   ✅ Created {args.config}")
    print("   ℹ️  編輯此檔後執行 sync 套用設定。")
    return 0


def cmd_show(args, config: dict) -> int:
    """Show: 顯示 CLI > config > 預設值 合併後實際使用的設定."""
    settings = resolve_settings(config, args)
    source = args.config if os.path.exists(args.config) else "(not created)"
    print("⚙️  Current twcss-merge configuration")
    print(f"   Config file:      {source}")
    print(f"   Stylesheet:       {settings.stylesheet}")
    print(f"   Import:           {settings.import_path}")
    print(f"   Framework import: {settings.framework_import}")
    print(f"   Theme file:       {settings.theme_file or '(not set)'}")
    print(f"   Theme introducer: {settings.introducer}")
    print(f"   Watch debounce:   {settings.debounce}s")
    return 0


class ChangeHandler(FileSystemEventHandler):
    """theme 檔變更事件處理器，帶 debounce 防抖。"""

    def __init__(self, callback, watched_paths, debounce: float = 1.0):
        self.callback = callback
        self.watched_paths = {os.path.abspath(p) for p in watched_paths}
        self.last_trigger = 0.0
        self.debounce_seconds = debounce

    def _handle(self, path: str) -> None:
        if os.path.abspath(path) not in self.watched_paths:
            return
        current_time = time.time()
        if current_time - self.last_trigger < self.debounce_seconds:
            return
        self.last_trigger = current_time
        print(f"\n🔄 File changed: {path}")
        self.callback()

    def on_modified(self, event):
        if event.is_directory:
            return
        self._handle(event.src_path)

    def on_created(self, event):
        if event.is_directory:
            return
        self._handle(event.src_path)

    def on_moved(self, event):
        # 編輯器常以「寫暫存檔再改名」的方式存檔
        if event.is_directory:
            return
        self._handle(event.dest_path)


def cmd_watch(args, config: dict) -> int:
    """Watch: 監聽 theme 檔變更並自動執行 sync."""
    settings = resolve_settings(config, args)
    if not settings.theme_file:
        print("   ❌ 請使用 --theme 或在 config 的 theme.file 設定 theme 原始檔。")
        return 1

    theme_dir = os.path.dirname(os.path.abspath(settings.theme_file))
    print(f"👀 Watching '{settings.theme_file}'...")
    print(f"   Target stylesheet: {settings.stylesheet}")
    print("   Press Ctrl+C to stop.")

    # 初始執行一次 sync
    run_sync(settings)

    event_handler = ChangeHandler(
        lambda: run_sync(settings),
        [settings.theme_file],
        debounce=settings.debounce,
    )
    observer = Observer()
    observer.schedule(event_handler, path=theme_dir, recursive=False)
    observer.start()

    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        print("\n👋 Stopping watch...")
        observer.stop()
    finally:
        observer.join()
    return 0


def _add_stylesheet_args(p, with_import: bool = True) -> None:
    p.add_argument("stylesheet", nargs="?", help="Stylesheet path (default: stylesheet.path or assets/css/app.css)")
    if with_import:
        p.add_argument("--import", dest="import_path", help="Import target (e.g. ../vendor/mishka_chelekom.css)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="twcss-merge: Tailwind 4 stylesheet @import / @theme merge",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--config", "-c", default=DEFAULT_CONFIG_PATH, help="Config path")
    parser.add_argument("--version", "-v", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command")

    add_p = sub.add_parser("add-import", help="Ensure the vendor @import exists",
        epilog="Examples:\n  twcss-merge add-import assets/css/app.css\n  twcss-merge add-import --import ../vendor/mishka.css --dry-run",
        formatter_class=argparse.RawDescriptionHelpFormatter)
    _add_stylesheet_args(add_p)
    add_p.add_argument("--dry-run", action="store_true", help="Print the diff instead of writing")

    sync_p = sub.add_parser("sync", help="Ensure @import and refresh the @theme block",
        epilog="Examples:\n  twcss-merge sync --theme assets/vendor/theme.css\n  twcss-merge sync assets/css/app.css --theme theme.css --dry-run",
        formatter_class=argparse.RawDescriptionHelpFormatter)
    _add_stylesheet_args(sync_p)
    sync_p.add_argument("--theme", help="Theme source file whose content replaces the @theme block")
    sync_p.add_argument("--dry-run", action="store_true", help="Print the diff instead of writing")

    check_p = sub.add_parser("check", help="Report whether the @import exists (exit 1 if missing)")
    _add_stylesheet_args(check_p)

    validate_p = sub.add_parser("validate", help="Check that the framework @import comes first")
    _add_stylesheet_args(validate_p, with_import=False)
    validate_p.add_argument("--framework-import", help="Framework import target (default: tailwindcss)")

    watch_p = sub.add_parser("watch", help="Re-sync whenever the theme file changes",
        epilog="Examples:\n  twcss-merge watch --theme assets/vendor/theme.css",
        formatter_class=argparse.RawDescriptionHelpFormatter)
    _add_stylesheet_args(watch_p)
    watch_p.add_argument("--theme", help="Theme source file to watch")
    watch_p.add_argument("--debounce", type=float, help="Seconds to ignore repeated change events")

    init_p = sub.add_parser("init", help="Write a sample config file to --config",
        epilog="Examples:\n  twcss-merge init\n  twcss-merge -c custom.config.json init --force",
        formatter_class=argparse.RawDescriptionHelpFormatter)
    init_p.add_argument("--force", action="store_true", help="Overwrite an existing config file")

    sub.add_parser("show", help="Print the effective configuration")

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    config = load_config(args.config)

    if args.command == "add-import":
        return cmd_add_import(args, config)
    elif args.command == "sync":
        return cmd_sync(args, config)
    elif args.command == "check":
        return cmd_check(args, config)
    elif args.command == "validate":
        return cmd_validate(args, config)
    elif args.command == "watch":
        return cmd_watch(args, config)
    elif args.command == "init":
        return cmd_init(args, config)
    elif args.command == "show":
        return cmd_show(args, config)
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
