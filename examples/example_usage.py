"""Example: drive the client data cache against a running API (no UI).

Signs in, loads the snapshot and prints the overview for the current month.
"""

import asyncio
import json
import sys

from src.ops_tracker.ops_tracker.analytics.filters import OverviewFilter
from src.ops_tracker.ops_tracker.client.app import ClientApp
from src.ops_tracker.ops_tracker.common.datetime_utils import month_of, today_iso


async def main(username: str, password: str) -> None:
    app = ClientApp.from_settings()
    try:
        await app.store.start()
        await app.store.login(username, password)

        month = month_of(today_iso())
        report = app.store.overview(OverviewFilter(date_start=f"{month}-01", date_end=f"{month}-31"))
        print(json.dumps(report.to_dict(), indent=2))
    finally:
        await app.close()


if __name__ == "__main__":
    asyncio.run(main(*sys.argv[1:3]))
