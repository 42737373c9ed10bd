import logging

from nicegui import ui

from finance_tracker.app import App
from finance_tracker.config import settings
from finance_tracker.database import init_db


@ui.page('/')
async def index():
    # One App per client so session state is never shared between browsers
    page = App()
    await page.start()


def main():
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    init_db()

    # Run NiceGUI
    ui.run(
        title=settings.app_title,
        port=settings.port,
        reload=False,
    )

if __name__ in {"__main__", "__mp_main__"}:
    main()
