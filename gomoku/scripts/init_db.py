import asyncio
import logging
from gomoku.app.core.database import engine, init_models, get_database_url

async def main():
    # Safe create (only creates if missing)
    await init_models(engine)
    logging.getLogger(__name__).info("Database tables ready at %s", get_database_url())
    await engine.dispose()

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(main())
