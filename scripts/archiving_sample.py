import argparse
import asyncio
import logging

from opentok_sdk.client import OpenTok
from opentok_sdk.core.errors import OpenTokError
from opentok_sdk.core.logging import setup_logging
from opentok_sdk.domain.schemas import Role, SessionProperties

logger = logging.getLogger("archiving_sample")

async def main(archive_name: str, list_only: bool):
    # Credentials come from OPENTOK_API_KEY / OPENTOK_API_SECRET (.env.local)
    async with OpenTok.from_settings() as ot:
        if list_only:
            archives = await ot.list_archives()
            print(f"{archives.count} archives")
            for archive in archives.items:
                print(f"{archive.id} {archive.status.value} {archive.name or ''} {archive.duration}s")
            return

        session = await ot.create_session(SessionProperties(p2p=False))
        print(f"Session: {session.session_id}")
        print(f"Moderator token: {ot.generate_token(session.session_id, role=Role.MODERATOR)}")

        # Archiving only works once a client has connected and is publishing
        try:
            archive = await ot.start_archive(session.session_id, archive_name)
            print(f"Started archive {archive.id}")
            archive = await ot.stop_archive(archive.id)
            print(f"Archive {archive.id} is {archive.status.value}")
        except OpenTokError as e:
            logger.error(f"Archiving failed: {e}")

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create a session, mint a token and exercise archiving.")
    parser.add_argument("--name", default="sample archive")
    parser.add_argument("--list", action="store_true", help="only list existing archives")
    args = parser.parse_args()

    setup_logging()
    asyncio.run(main(args.name, args.list))
