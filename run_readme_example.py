"""Run the README example against a real Google Sheet."""

import asyncio
import sys

from simplesheets import HeaderIndex, PreconditionError, SheetsConfig, SpreadsheetSession


async def main():
    config = SheetsConfig.from_env()
    try:
        transport = config.build_transport()
    except PreconditionError as exc:
        print(f"Error: {exc}")
        print("See README for credential setup instructions.")
        sys.exit(1)

    session = SpreadsheetSession(transport)
    spreadsheet_id = config.SPREADSHEET_ID or await session.create_spreadsheet("Team")
    await session.select_spreadsheet(spreadsheet_id)
    await session.select_sheet(config.SHEET_NAME or 0)

    if not len(session.headers):
        headers = HeaderIndex()
        headers.add_header("Name", 0)
        headers.add_header("Role", 1)
        await session.set_headers(headers)

    await session.set_row(2, {"Name": "Ada", "Role": "Engineer"})
    print(await session.get_row(2))
    print(f"https://docs.google.com/spreadsheets/d/{spreadsheet_id}")


if __name__ == "__main__":
    asyncio.run(main())
