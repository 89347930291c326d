from __future__ import annotations

from datetime import date

import pytest

from pulse.zones import ZoneConfig

TODAY = date(2025, 6, 3)

EVENT_LOG_CSV = """Timestamp,User,Identity,Date,Zone,Tag,Source,Sent
"Jun 3, 2025, 2:49:17 AM","@Guillaume Deramchi","@Guillaume Deramchi","2025-06-03","Jeremy's office","","SLACK",""
"Jun 3, 2025, 8:10:00 AM","alice@x","Alice Martin","2025-06-03","Tech Hub","","SLACK",""
"Jun 3, 2025, 9:15:00 AM","alice@x","Alice Martin","2025-06-03","tech hub","","SLACK",""
"Jun 2, 2025, 5:00:00 PM","bob@x","Bob Smith","2025-06-02","Revenue Flex","","SLACK",""
"May 20, 2025, 9:00:00 AM","carol@x","Carol Johnson","2025-05-20","Tech Hub","","SLACK",""
"""

DASHBOARD_CSV = """date,zone,capacity,count,people
2025-06-02,Z-Tech,42,2,"Alice Martin; Bob Smith"
2025-06-03,Z-Tech,42,1,"Alice Martin"
2025-06-03,Z-RevF,18,2,"Alice Martin; Carol Johnson"
45812,Tako,8,1,"Dan Brown"
2025-06-09,Z-Tech,42,1,"Eve Adams"
"""


@pytest.fixture
def zones() -> ZoneConfig:
    return ZoneConfig()


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def event_log_csv() -> str:
    return EVENT_LOG_CSV


@pytest.fixture
def dashboard_csv() -> str:
    return DASHBOARD_CSV
