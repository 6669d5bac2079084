from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo

# th-TH short forms used in every customer and operator text:
# day/month/Buddhist-era year, 24-hour HH:MM:SS.

def thai_date(moment: datetime) -> str:
    return f"{moment.day}/{moment.month}/{moment.year + 543}"

def thai_time(moment: datetime) -> str:
    return moment.strftime("%H:%M:%S")

def thai_timestamp(tz: ZoneInfo, moment: Optional[datetime] = None) -> str:
    moment = (moment or datetime.now(tz)).astimezone(tz)
    return f"{thai_date(moment)} {thai_time(moment)}"
