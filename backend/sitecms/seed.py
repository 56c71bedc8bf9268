import logging

from sitecms.core.config import settings
from sitecms.db.bootstrap import run_startup_sync
from sitecms.db.session import make_engine

def main():
    logging.basicConfig(level=settings.log_level)
    engine = make_engine(settings.database_url)
    try:
        run_startup_sync(engine, settings)
    finally:
        engine.dispose()

if __name__ == "__main__":
    main()
