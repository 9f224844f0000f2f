from __future__ import annotations

import argparse
from typing import List

from .app_log import AppLog
from .config import AppConfig, load_config
from .errors import PostMateError, user_friendly_message
from .paths import get_log_path
from .platforms import Platform, platform_ids
from .reconciler import reconcile, status_counts
from .scheduler import check_scheduled_posts
from .schedule_time import format_local
from .sheets import SheetsDatastore
from .validation import validate
from .webhook import resolve_webhook_url, test_webhook


def _datastore(config: AppConfig) -> SheetsDatastore:
    return SheetsDatastore.from_config(config)


def cmd_validate(platforms: List[str], content: str, overrides: List[str] | None = None) -> int:
    """Check content against the limits of the given platforms."""
    platform_content = {}
    for item in overrides or []:
        platform, _, text = item.partition("=")
        platform_content[platform] = text

    violations = validate(content, platform_content, platforms)
    for platform in platforms:
        parsed = Platform.parse(platform)
        if parsed is None:
            print(f"- {platform}: unknown platform, skipped")
            continue
        text = platform_content.get(platform) or content
        marker = "✗" if platform in violations else "✓"
        print(f"{marker} {parsed.display_name}: {len(text)}/{parsed.max_length}")

    if violations:
        print("\nCharacter limit exceeded:")
        for messages in violations.values():
            for message in messages:
                print(f"  {message}")
        return 1
    return 0


def cmd_list_posts(config: AppConfig) -> int:
    records = _datastore(config).fetch_records()
    if not records:
        print("No posts found in the sheet.")
        return 0

    displayed = reconcile(records)
    print(f"{'ID':<22} {'PLATFORM':<10} {'SCHEDULE (JST)':<17} STATUS")
    for item in displayed:
        record = item.record
        status = item.display_status.value
        if item.is_overridden:
            status += f" (stored: {item.stored_status.value})"
        print(f"{record.id:<22} {record.platform:<10} {format_local(record.schedule_time):<17} {status}")

    counts = status_counts(displayed)
    print("\n" + "  ".join(f"{k}: {v}" for k, v in counts.items()))
    return 0


def cmd_check_scheduled(config: AppConfig, log: AppLog) -> int:
    datastore = _datastore(config)
    webhook_url = resolve_webhook_url(config.webhook_url, datastore)
    result = check_scheduled_posts(datastore, webhook_url, log=log)
    if not result.due:
        print("No scheduled posts are due.")
    else:
        print(f"🚀 Triggered the automation for {result.processed_count} due post(s).")
    return 0


def cmd_test_webhook(config: AppConfig, log: AppLog) -> int:
    datastore = _datastore(config) if config.is_sheets_configured() else None
    test_webhook(resolve_webhook_url(config.webhook_url, datastore), log=log)
    print("✅ Test webhook sent")
    return 0


def cmd_check_config(config: AppConfig) -> int:
    """Show which collaborators are configured."""
    print("\n=== Configuration Status ===\n")
    print(f"Google Sheet:  {'✓ Configured' if config.is_sheets_configured() else '✗ Not configured'}")
    print(f"AI service:    {'✓ ' + config.ai_service + ' / ' + config.ai_model if config.is_ai_configured() else '✗ Not configured'}")
    print(f"Webhook:       {'✓ Configured' if config.is_webhook_configured() else '✗ Not configured (may be stored in the sheet)'}")
    print(f"Supabase:      {'✓ Configured' if config.is_supabase_configured() else '✗ Not configured (using SQLite)'}")

    if not config.is_sheets_configured():
        print("\nTo configure the sheet, set:")
        print("  GOOGLE_SHEET_ID=your_sheet_id")
        print("  GOOGLE_SERVICE_ACCOUNT_FILE=/path/to/service_account.json")
    if not config.is_ai_configured():
        print("\nTo configure AI drafts, set:")
        print("  AI_SERVICE=openai|anthropic|google")
        print("  AI_MODEL=model_name")
        print("  AI_API_TOKEN=your_token")
    return 0


def main(argv: List[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="PostMate SNS post scheduling tools")
    sub = parser.add_subparsers(dest="command")

    validate_parser = sub.add_parser("validate", help="Check content against platform character limits")
    validate_parser.add_argument("--platforms", nargs="+", required=True, help=f"Platforms ({', '.join(platform_ids())})")
    validate_parser.add_argument("--content", required=True, help="Shared post content")
    validate_parser.add_argument("--override", action="append", metavar="PLATFORM=TEXT", help="Per-platform content")

    sub.add_parser("list-posts", help="List posts with their displayed status")
    sub.add_parser("check-scheduled", help="Trigger the automation for due scheduled posts")
    sub.add_parser("test-webhook", help="Send a test trigger to the automation webhook")
    sub.add_parser("check-config", help="Check which services are configured")

    args = parser.parse_args(argv)

    if args.command == "validate":
        return cmd_validate(args.platforms, args.content, args.override)
    if args.command is None:
        parser.print_help()
        return 0

    config = load_config()
    if args.command == "check-config":
        return cmd_check_config(config)

    log = AppLog(get_log_path()).load()
    try:
        if args.command == "list-posts":
            return cmd_list_posts(config)
        if args.command == "check-scheduled":
            return cmd_check_scheduled(config, log)
        if args.command == "test-webhook":
            return cmd_test_webhook(config, log)
    except PostMateError as e:
        friendly = user_friendly_message(e)
        print(f"❌ {friendly.title}: {friendly.description}")
        print(f"   {e}")
        return 1
    finally:
        log.flush()

    parser.print_help()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
