"""
Terminal chat with Stockie over the same turn use case as the HTTP app.

Run:
    python -m marketminds.infrastructure.entrypoints.chat_cli [--user NAME]

Commands: /reset clears the conversation, /quit (or Ctrl-D) exits.
"""

import argparse
import asyncio
import logging

from marketminds.infrastructure.entrypoints.bootstrap import Services, build_services, load_settings
from marketminds.infrastructure.logging_config import configure_logging

logger = logging.getLogger(__name__)

RESET_COMMAND = "/reset"
QUIT_COMMANDS = {"/quit", "/exit"}


def _print_message(role: str, content: str) -> None:
    label = "you" if role == "user" else "stockie"
    print(f"\n[{label}]\n{content}\n")


async def chat(services: Services, user_id: str) -> None:
    for message in services.conversations.history(user_id):
        _print_message(message.role, message.content)

    while True:
        try:
            line = (await asyncio.to_thread(input, "> ")).strip()
        except EOFError:
            break
        if not line:
            continue
        if line in QUIT_COMMANDS:
            break
        if line == RESET_COMMAND:
            for message in services.run_turn.reset(user_id):
                _print_message(message.role, message.content)
            continue
        result = await services.run_turn.execute(user_id, line)
        _print_message("assistant", result.reply.content)

    services.observability.flush()


def main() -> None:
    parser = argparse.ArgumentParser(description="Chat with Stockie, the MarketMinds assistant")
    parser.add_argument("--user", default="local", help="user id for the transcript and workspace")
    args = parser.parse_args()

    settings = load_settings()
    configure_logging(settings.log_level)
    services = build_services(settings)
    try:
        asyncio.run(chat(services, args.user))
    except KeyboardInterrupt:
        logger.info("Interrupted")


if __name__ == "__main__":
    main()
