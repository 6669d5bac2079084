from ticketdesk.core import messages
from ticketdesk.core.mapping import resolve_concert_mapping
from ticketdesk.core.matcher import RecordMatcher
from ticketdesk.schemas.result import Ok, Err
from conftest import FakeSheets, MASTER_ID

def test_mapping_trims_and_skips_incomplete_rows():
    sheets = FakeSheets({MASTER_ID: {"index": [
        [" ConcertA ", " sheet123 "],
        ["NoId"],
        ["", "orphan"],
        [],
        ["ConcertB", "sheet789"],
    ]}})
    result = resolve_concert_mapping(sheets, MASTER_ID, "index")
    assert isinstance(result, Ok)
    assert result.value == {"ConcertA": "sheet123", "ConcertB": "sheet789"}
    assert list(result.value) == ["ConcertA", "ConcertB"]

def test_mapping_read_failure_is_returned_to_caller():
    sheets = FakeSheets({})
    result = resolve_concert_mapping(sheets, MASTER_ID, "index")
    assert isinstance(result, Err)

def test_example_single_concert():
    """Mapping {"ConcertA": "sheet123"} with one booking row for Jane."""
    sheets = FakeSheets({
        MASTER_ID: {"index": [["ConcertA", "sheet123"]]},
        "sheet123": {"Sheet1": [[1, "", "Jane", "0810000000", "Uabc"]]},
    })
    matcher = RecordMatcher(sheets, MASTER_ID)

    found = matcher.search("Jane", None)
    assert found.count("🎟️") == 1
    assert "Uabc" in found
    assert "[ConcertA - Sheet1]" in found

    assert matcher.search("Jane", "ConcertB") == messages.CONCERT_NOT_FOUND.format(concert="ConcertB")

def test_search_all_concerts_by_name(matcher):
    result = matcher.search("Jane")
    entries = result.split("\n\n")
    assert len(entries) == 2
    assert "UID: Uabc" in entries[0]
    assert "[Blackpink2025 - Day 2]" in entries[1]

def test_search_by_phone(matcher):
    result = matcher.search("0899999999")
    assert "ชื่อ: Somchai" in result
    assert "UID: Uxyz" in result

def test_queue_order_ignored_without_concert(matcher):
    # Row 7 exists in ConcertA, but its name and phone do not contain "7"
    assert matcher.search("7") == messages.KEYWORD_NOT_FOUND_ALL.format(keyword="7")

def test_queue_order_matches_within_named_concert(matcher):
    result = matcher.search("7", "ConcertA")
    assert result.count("🎟️") == 1
    assert "ลำดับ: 7" in result
    assert "UID: Uxyz" in result

def test_queue_order_requires_exact_digits(matcher):
    assert matcher.search("07", "ConcertA") == messages.KEYWORD_NOT_FOUND_NAMED.format(keyword="07", concert="ConcertA")

def test_row_listed_once_when_several_predicates_hit():
    sheets = FakeSheets({
        MASTER_ID: {"index": [["ConcertA", "sheet123"]]},
        "sheet123": {"Sheet1": [[5, "", "Ann 5", "0855555555", "Uann"]]},
    })
    result = RecordMatcher(sheets, MASTER_ID).search("5", "ConcertA")
    assert result.count("🎟️") == 1

def test_named_concert_is_exact_and_case_sensitive(matcher):
    assert matcher.search("Jane", "concerta") == messages.CONCERT_NOT_FOUND.format(concert="concerta")
    # Index names are trimmed, the query is trimmed too
    assert "Mali" in matcher.search("Mali", " Blackpink2025 ")

def test_named_scope_restricts_candidates(matcher):
    result = matcher.search("Jane", "Blackpink2025")
    assert result.count("🎟️") == 1
    assert "Ujd" in result

def test_unreadable_tab_is_skipped(sheets, matcher):
    sheets.failing_ranges.add(("sheet456", "'Day 2'!A2:E"))
    result = matcher.search("Jane")
    assert result.count("🎟️") == 1
    assert "Uabc" in result

def test_unreadable_spreadsheet_is_skipped(sheets, matcher):
    sheets.failing_ids.add("sheet123")
    result = matcher.search("Jane")
    assert result.count("🎟️") == 1
    assert "Ujd" in result

def test_mapping_failure_degrades_to_not_found(sheets, matcher):
    sheets.failing_ids.add(MASTER_ID)
    assert matcher.search("Jane") == messages.KEYWORD_NOT_FOUND_ALL.format(keyword="Jane")
    assert matcher.search("Jane", "ConcertA") == messages.CONCERT_NOT_FOUND.format(concert="ConcertA")

def test_blank_keyword_matches_nothing(matcher):
    assert matcher.search("   ") == messages.KEYWORD_NOT_FOUND_ALL.format(keyword="")

def test_lookup_uid_requires_uid_and_concert(matcher):
    assert matcher.lookup_uid("Uabc", None) == messages.UID_LOOKUP_USAGE
    assert matcher.lookup_uid(None, "ConcertA") == messages.UID_LOOKUP_USAGE
    assert matcher.lookup_uid("  ", "ConcertA") == messages.UID_LOOKUP_USAGE

def test_lookup_uid_returns_seat_details(matcher):
    result = matcher.lookup_uid(" Uabc ", "ConcertA")
    assert "🎟️ งาน: ConcertA" in result
    assert "📅 วันแสดง: 20 Dec" in result
    assert "💸 ราคา: 3500 บาท" in result
    assert "📍 โซนและที่นั่ง: A1 12-13" in result
    assert "💺 จำนวน: 2 ใบ" in result
    assert result.endswith("https://order/1")

def test_lookup_uid_fills_missing_cells_with_dash(matcher):
    result = matcher.lookup_uid("Uxyz", "ConcertA")
    assert "📍 โซนและที่นั่ง: -" in result
    assert result.endswith("-")

def test_lookup_uid_not_found_and_unknown_concert(matcher):
    assert matcher.lookup_uid("Umali", "ConcertA") == messages.UID_NOT_FOUND.format(uid="Umali", concert="ConcertA")
    assert matcher.lookup_uid("Uabc", "Nope") == messages.CONCERT_NOT_FOUND.format(concert="Nope")

def test_lookup_uid_unreadable_concert(sheets, matcher):
    sheets.failing_ids.add("sheet123")
    assert matcher.lookup_uid("Uabc", "ConcertA") == messages.CONCERT_UNREADABLE.format(concert="ConcertA")

def test_find_customer_row(matcher):
    hit = matcher.find_customer_row("Uxyz")
    assert hit.concert_name == "ConcertA"
    assert hit.spreadsheet_id == "sheet123"
    assert hit.row_number == 3
    assert hit.stop_flag_cell == "N3"
    assert matcher.find_customer_row("Unobody") is None
