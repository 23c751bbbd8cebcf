"""
Interactive CLI for Brainnova.

Plain input goes to the session; lines starting with '/' are data manager
and interface commands.
"""

import logging
import os
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent))

from brainnova.fact_store import ImportRejected
from brainnova.formatting import render
from brainnova.session import BOOT_MESSAGE, BrainnovaSession, SessionConfig

DEFAULT_BACKUP = "brainnova_backup.json"


def _print_response(session, text, reason, style):
    info = session.mode_info
    print(f"[{info.id.upper()}] {reason}")
    print(render(text, style))


def _print_stats(stats):
    print(f"   💾 {stats.count} facts · {stats.size_kb}")


def main():
    """Run the Brainnova CLI"""
    logging.basicConfig(
        level=os.getenv("BRAINNOVA_LOG_LEVEL", "WARNING").upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )

    style = "ansi" if sys.stdout.isatty() else "plain"
    config = SessionConfig.from_env()
    session = BrainnovaSession(config=config)
    session.store.subscribe(_print_stats)

    print("=" * 60)
    print("BRAINNOVA - Personal Fact Memory")
    print("=" * 60)
    print(f"Mode: {session.mode_info.name}")
    _print_stats(session.get_stats())
    print()
    _print_response(session, BOOT_MESSAGE, "BOOT", style)
    print()
    print("Type '/quit' or '/exit' to exit, '/help' for commands")
    print("=" * 60)
    print()

    while True:
        try:
            user_input = input("You: ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\n\nGoodbye!")
            break

        if not user_input:
            continue

        if user_input.startswith('/'):
            command, _, argument = user_input[1:].partition(' ')
            command = command.lower()
            argument = argument.strip()

            if command in ['quit', 'exit']:
                print("\nGoodbye!")
                break

            elif command == 'help':
                print("\n📖 Commands:")
                print("   /quit          - Exit the program")
                print("   /mode          - Switch to the next mode")
                print("   /stats         - Show memory statistics")
                print("   /export [path] - Save a backup (default: brainnova_backup.json)")
                print("   /import <path> - Merge facts from a backup")
                print("   /wipe          - Delete all memories")
                print("   help           - Teaching syntax")
                print()
                continue

            elif command == 'mode':
                session.toggle_mode()
                print(f"\n🔁 Mode: {session.mode_info.name}")
                print()
                continue

            elif command == 'stats':
                stats = session.get_stats()
                print(f"\n📊 Statistics:")
                print(f"   Facts: {stats.count}")
                print(f"   Size: {stats.size_kb}")
                print()
                continue

            elif command == 'export':
                try:
                    path = session.export_backup(Path(argument or DEFAULT_BACKUP))
                except OSError as e:
                    print(f"\n❌ Export failed: {e}")
                    print()
                    continue
                print(f"\n✅ Backup written to {path}")
                print()
                continue

            elif command == 'import':
                if not argument:
                    print("\n⚠️  Usage: /import <path>")
                    print()
                    continue
                try:
                    count = session.import_backup(Path(argument))
                except (ImportRejected, OSError) as e:
                    print(f"\n❌ Invalid JSON: {e}")
                    print()
                    continue
                print()
                _print_response(session, f"Batch imported {count} items.", "DATA", style)
                print()
                continue

            elif command == 'wipe':
                confirm = input("Delete all memories? (yes/no): ").strip().lower()
                if confirm == 'yes':
                    session.wipe()
                    _print_response(session, "Memory Wiped.", "RESET", style)
                else:
                    print("❌ Wipe cancelled")
                print()
                continue

            else:
                print(f"\n⚠️  Unknown command: /{command}")
                print("   Type '/help' for available commands")
                print()
                continue

        response = session.process_message(user_input)
        _print_response(session, response.text, response.reason, style)
        print()


if __name__ == "__main__":
    main()
