from pydantic import BaseModel
from typing import List, Optional

# Column positions in a concert booking tab (row 1 is the header).
COL_ORDER = 0      # A  queue order
COL_NAME = 2       # C  display name
COL_PHONE = 3      # D  phone
COL_UID = 4        # E  LINE user id
COL_ROUND = 6      # G  show round
COL_COUNT = 7      # H  ticket count
COL_PRICE = 8      # I  price
COL_ZONE = 11      # L  seat zone
COL_ORDER_LINK = 12  # M  order link
COL_STOP_FLAG = 13   # N  stop flag

STOP_FLAG_COLUMN = "N"
FIRST_DATA_ROW = 2

class BookingRow(BaseModel):
    cells: List[str] = []

    @classmethod
    def from_cells(cls, cells: List) -> "BookingRow":
        return cls(cells=["" if c is None else str(c) for c in cells])

    def cell(self, index: int) -> str:
        if index < len(self.cells):
            return self.cells[index]
        return ""

    @property
    def order(self) -> str:
        return self.cell(COL_ORDER)

    @property
    def name(self) -> str:
        return self.cell(COL_NAME)

    @property
    def phone(self) -> str:
        return self.cell(COL_PHONE)

    @property
    def uid(self) -> str:
        return self.cell(COL_UID)

class CustomerRowHit(BaseModel):
    concert_name: str
    spreadsheet_id: str
    row_number: int
    row: BookingRow

    @property
    def stop_flag_cell(self) -> str:
        return f"{STOP_FLAG_COLUMN}{self.row_number}"

def or_dash(value: Optional[str]) -> str:
    return value if value else "-"
