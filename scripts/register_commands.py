"""Register the game night slash commands with Discord.

Usage:
    python scripts/register_commands.py            # guild commands (instant)
    python scripts/register_commands.py --global   # global commands
    python scripts/register_commands.py --dry-run  # print the payload only
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))
from dotenv import load_dotenv

load_dotenv()
load_dotenv(".env.local", override=True)

from core.config import GameNightConfig
from core.discord_outbound import DiscordHTTPError, DiscordRestClient, overwrite_guild_commands
from core.game_nights import build_catalog


async def main(register_globally: bool, dry_run: bool) -> int:
    payload = build_catalog().to_payload()

    if dry_run:
        print(json.dumps(payload, indent=2, ensure_ascii=False))
        return 0

    config = GameNightConfig.from_env()
    client = DiscordRestClient(config.discord_token)
    guild_id = None if register_globally else config.guild_id
    try:
        registered = await overwrite_guild_commands(
            client, config.application_id, guild_id, payload
        )
    except DiscordHTTPError as e:
        print(f"Failed to register commands: {e}")
        return 1
    finally:
        await client.close()

    scope = "globally" if register_globally else f"in guild {guild_id}"
    print(f"Registered {len(registered)} commands {scope}:")
    for command in registered:
        print(f"  /{command['name']}")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Register slash commands with Discord")
    parser.add_argument(
        "--global",
        dest="register_globally",
        action="store_true",
        help="Register global commands instead of guild commands",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the command payload without calling Discord",
    )
    args = parser.parse_args()
    sys.exit(asyncio.run(main(args.register_globally, args.dry_run)))
