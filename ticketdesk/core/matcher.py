from typing import Dict, List, Optional
import logging

from ticketdesk.core import messages
from ticketdesk.core.mapping import resolve_concert_mapping
from ticketdesk.core.sheets import SheetsGateway, a1_range
from ticketdesk.schemas.booking import (
    BookingRow, CustomerRowHit, FIRST_DATA_ROW, or_dash,
    COL_ROUND, COL_COUNT, COL_PRICE, COL_ZONE, COL_ORDER_LINK,
)
from ticketdesk.schemas.result import Err

logger = logging.getLogger(__name__)

SEARCH_CELLS = "A2:E"
LOOKUP_CELLS = "A2:P"
# Unqualified range: the API resolves it against the first tab.
CUSTOMER_CELLS = "A2:O"

class RecordMatcher:
    """
    Scans the booking spreadsheets listed in the master index.

    Every lookup reloads the index. Unreadable tabs and spreadsheets are
    logged and skipped so a search returns whatever could be read.
    """

    def __init__(self, gateway: SheetsGateway, master_sheet_id: str, index_sheet: str = "index"):
        self.gateway = gateway
        self.master_sheet_id = master_sheet_id
        self.index_sheet = index_sheet

    def _mapping(self) -> Dict[str, str]:
        result = resolve_concert_mapping(self.gateway, self.master_sheet_id, self.index_sheet)
        if isinstance(result, Err):
            return {}
        return result.value

    def _rows(self, spreadsheet_id: str, a1: str, label: str) -> Optional[List[BookingRow]]:
        result = self.gateway.read_range(spreadsheet_id, a1)
        if isinstance(result, Err):
            logger.warning(f"Skipping {label}: {result.reason}")
            return None
        return [BookingRow.from_cells(cells) for cells in result.value]

    def search(self, keyword: str, target_name: Optional[str] = None) -> str:
        """Find rows by queue order (named concert only), name or phone."""
        keyword = (keyword or "").strip()
        target = target_name.strip() if target_name and target_name.strip() else None

        mapping = self._mapping()
        if target:
            targets = [(name, sid) for name, sid in mapping.items() if name == target]
            if not targets:
                return messages.CONCERT_NOT_FOUND.format(concert=target)
        else:
            targets = list(mapping.items())

        results: List[str] = []
        if keyword:
            for concert_name, spreadsheet_id in targets:
                titles = self.gateway.worksheet_titles(spreadsheet_id)
                if isinstance(titles, Err):
                    logger.warning(f"Skipping concert {concert_name}: {titles.reason}")
                    continue
                for tab in titles.value:
                    rows = self._rows(spreadsheet_id, a1_range(tab, SEARCH_CELLS), f"tab {tab} of {concert_name}")
                    if rows is None:
                        continue
                    for row in rows:
                        if self._row_matches(row, keyword, by_order=target is not None):
                            results.append(messages.SEARCH_HIT.format(
                                concert=concert_name,
                                tab=tab,
                                order=or_dash(row.order),
                                name=or_dash(row.name),
                                phone=or_dash(row.phone),
                                uid=or_dash(row.uid),
                            ))

        if not results:
            if target:
                return messages.KEYWORD_NOT_FOUND_NAMED.format(keyword=keyword, concert=target)
            return messages.KEYWORD_NOT_FOUND_ALL.format(keyword=keyword)
        return "\n\n".join(results)

    @staticmethod
    def _row_matches(row: BookingRow, keyword: str, by_order: bool) -> bool:
        # Queue numbers repeat across concerts, so they only count inside one
        if by_order and keyword.isdigit() and row.order.strip() == keyword:
            return True
        if row.name and keyword in row.name:
            return True
        if row.phone and keyword in row.phone:
            return True
        return False

    def lookup_uid(self, uid: Optional[str], concert_name: Optional[str]) -> str:
        """Seat details for the first row whose UID column equals uid."""
        uid = (uid or "").strip()
        concert = (concert_name or "").strip()
        if not uid or not concert:
            return messages.UID_LOOKUP_USAGE

        spreadsheet_id = self._mapping().get(concert)
        if spreadsheet_id is None:
            return messages.CONCERT_NOT_FOUND.format(concert=concert)

        titles = self.gateway.worksheet_titles(spreadsheet_id)
        if isinstance(titles, Err):
            logger.error(f"Cannot read concert {concert}: {titles.reason}")
            return messages.CONCERT_UNREADABLE.format(concert=concert)

        for tab in titles.value:
            rows = self._rows(spreadsheet_id, a1_range(tab, LOOKUP_CELLS), f"tab {tab} of {concert}")
            if rows is None:
                continue
            for row in rows:
                if row.uid.strip() == uid:
                    return messages.SEAT_DETAILS.format(
                        concert=concert,
                        round=or_dash(row.cell(COL_ROUND)),
                        price=or_dash(row.cell(COL_PRICE)),
                        zone=or_dash(row.cell(COL_ZONE)),
                        count=or_dash(row.cell(COL_COUNT)),
                        order_link=or_dash(row.cell(COL_ORDER_LINK)),
                    )

        return messages.UID_NOT_FOUND.format(uid=uid, concert=concert)

    def find_customer_row(self, uid: str) -> Optional[CustomerRowHit]:
        """First booking row (first tab of each concert) owned by uid."""
        if not uid:
            return None
        for concert_name, spreadsheet_id in self._mapping().items():
            rows = self._rows(spreadsheet_id, CUSTOMER_CELLS, f"concert {concert_name}")
            if rows is None:
                continue
            for offset, row in enumerate(rows):
                if row.uid == uid:
                    return CustomerRowHit(
                        concert_name=concert_name,
                        spreadsheet_id=spreadsheet_id,
                        row_number=offset + FIRST_DATA_ROW,
                        row=row,
                    )
        return None
