# Example of a game component pushing and pulling leaderboard data through RequestDispatcher.

import asyncio
import logging

from simple_web_service import RequestDispatcher, WebServiceConfig, configure_logging

API_URL = "http://localhost:4000/api"

logger = logging.getLogger(__name__)


def on_leaderboard(value) -> None:
    for entry in value or []:
        logger.info("%s: %s", entry.get("player"), entry.get("score"))


def on_score_saved(value) -> None:
    logger.info("Score saved: %s", value)


async def main() -> None:
    config = WebServiceConfig.from_env()
    configure_logging(config)

    async with RequestDispatcher(config) as service:
        service.post(f"{API_URL}/scores", {"player": "archer", "score": 1200}, on_score_saved)
        service.patch(f"{API_URL}/players/archer", '{"level": 4}')
        service.post_form(f"{API_URL}/login", {"name": "archer", "pin": "0000"})
        service.get(f"{API_URL}/leaderboard", on_leaderboard)

        result = await service.fetch("DELETE", f"{API_URL}/sessions/archer")
        if not result.ok:
            logger.warning("Logout failed (%s)", result.error_kind)


if __name__ == "__main__":
    asyncio.run(main())
