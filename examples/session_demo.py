"""
Demonstration of the session workflow against the in-memory transport.

This script selects a sheet, reads and writes rows as records, shows header
invalidation after a header-row write, and reads the data as a DataFrame.
No Google credentials are needed.
"""

import asyncio

from simplesheets import HeaderIndex, LocalTransport, SpreadsheetSession


async def main():
    """Walk through a session on a small pre-filled spreadsheet."""

    print("=" * 70)
    print("simplesheets Session Demo")
    print("=" * 70)
    print()

    transport = LocalTransport()
    spreadsheet_id = transport.add_spreadsheet(
        "Team",
        {
            "People": [
                ["Name", "Role", "Name"],
                ["Ada", "Engineer", "Lovelace"],
                ["Alan", "Researcher", "Turing"],
            ]
        },
    )

    session = SpreadsheetSession(transport)
    await session.select_spreadsheet(spreadsheet_id)
    await session.select_sheet("People")

    print(f"Sheets: {session.metadata.sheet_titles}")
    print(f"Headers (duplicates renamed): {session.headers.names_by_column()}")
    print()

    print("Row 2 as a record:")
    print(f"  {await session.get_row(2)}")
    print()

    await session.set_row(4, {"Name": "Grace", "Role": "Admiral", "Name2": "Hopper"})
    print("Wrote row 4; sheet now holds:")
    for line in transport.sheet_values(spreadsheet_id, "People"):
        print(f"  {line}")
    print()

    headers = HeaderIndex()
    headers.add_header("First", 0)
    headers.add_header("Role", 1)
    headers.add_header("Last", 2)
    await session.set_headers(headers)
    print(f"Renamed headers: {session.headers.names_by_column()}")

    await session.set_row_array(1, ["Given name"])
    print(f"After writing row 1 directly, session state is {session.state.value}")
    await session.refresh_headers()
    print(f"Reloaded headers: {session.headers.names_by_column()}")
    print()

    changed = await session.find_and_replace("Engineer", "Mathematician")
    print(f"find_and_replace changed {changed} value(s)")
    await session.refresh_headers()

    print()
    print("Data as a DataFrame:")
    print(await session.get_frame())


if __name__ == "__main__":
    asyncio.run(main())
