from typing import Dict
import logging

from ticketdesk.core.sheets import SheetsGateway, a1_range
from ticketdesk.schemas.result import Ok, Err, ReadResult

logger = logging.getLogger(__name__)

def resolve_concert_mapping(gateway: SheetsGateway, master_sheet_id: str, index_sheet: str) -> ReadResult:
    """
    Read the index tab (A: concert name, B: spreadsheet id) into an ordered
    {name: spreadsheet_id} dict. Rows missing either value are skipped.
    Nothing is cached; every call reloads the index.
    """
    result = gateway.read_range(master_sheet_id, a1_range(index_sheet, "A2:B"))
    if isinstance(result, Err):
        logger.warning(f"Concert mapping unavailable: {result.reason}")
        return result

    mapping: Dict[str, str] = {}
    for row in result.value:
        name = str(row[0]).strip() if len(row) > 0 and row[0] is not None else ""
        sheet_id = str(row[1]).strip() if len(row) > 1 and row[1] is not None else ""
        if name and sheet_id:
            mapping[name] = sheet_id
    return Ok(value=mapping)
