"""
Data models for the check-in reconciler
"""
from dataclasses import dataclass, field, replace
from datetime import date, datetime, time
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional, Tuple


# Input/output column names
ACCOUNT_NUMBER = "Account Number"
ID_NUMBER = "ID Number"
FIRST_NAME = "First Name"
LAST_NAME = "Last Name"
PROGRAM = "Program"
CHECK_IN_DATE = "Check-In Date"
CHECK_IN_TIME = "Check-In Time"
TOTAL_VISITS = "Total Visits"

IDENTITY_COLUMNS = [ACCOUNT_NUMBER, ID_NUMBER, FIRST_NAME, LAST_NAME, PROGRAM]
INPUT_COLUMNS = IDENTITY_COLUMNS + [CHECK_IN_DATE, CHECK_IN_TIME]
OUTPUT_COLUMNS = INPUT_COLUMNS + [TOTAL_VISITS]


class FieldType(Enum):
    """Supported field types"""
    STRING = "string"
    INTEGER = "integer"
    DATE = "date"
    TIME = "time"


@dataclass
class Field:
    """Schema field definition"""
    name: str
    type: FieldType
    nullable: bool = True
    description: Optional[str] = None


@dataclass
class Schema:
    """Complete schema definition"""
    name: str
    fields: List[Field]

    version: str = "1.0"
    created_at: Optional[datetime] = None

    @property
    def column_names(self) -> List[str]:
        return [f.name for f in self.fields]


OUTPUT_SCHEMA = Schema(
    name="reconciled_checkins",
    fields=[
        Field(ACCOUNT_NUMBER, FieldType.STRING),
        Field(ID_NUMBER, FieldType.STRING),
        Field(FIRST_NAME, FieldType.STRING),
        Field(LAST_NAME, FieldType.STRING),
        Field(PROGRAM, FieldType.STRING),
        Field(CHECK_IN_DATE, FieldType.DATE, nullable=False, description="yyyy-mm-dd"),
        Field(CHECK_IN_TIME, FieldType.TIME, nullable=False, description="h:mmam / h:mmpm"),
        Field(TOTAL_VISITS, FieldType.INTEGER, nullable=False),
    ],
)


@dataclass
class RecordMetadata:
    """Metadata associated with a record"""

    # Source information
    source_type: str  # 'csv', 'reconciler'
    source_id: str    # File path or visitor key

    record_id: Optional[str] = None

    # Lineage tracking
    pipeline_id: str = ""
    stage: str = ""  # 'extract', 'transform', 'load'

    # True for check-ins created by the synthetic visit generator
    synthetic: bool = False

    custom: Dict[str, Any] = field(default_factory=dict)


@dataclass
class Record:
    """Standardized record format for pipeline data flow"""

    # Primary data payload
    data: Dict[str, Any]

    metadata: RecordMetadata

    schema: Optional[Schema] = None

    # Processing timestamps
    extracted_at: Optional[datetime] = None
    transformed_at: Optional[datetime] = None
    loaded_at: Optional[datetime] = None


@dataclass(frozen=True)
class VisitRecord:
    """A single check-in: a calendar date plus a time of day"""
    date: date
    time: time
    synthetic: bool = False

    @property
    def sort_key(self) -> Tuple[date, time]:
        return (self.date, self.time)


@dataclass(frozen=True)
class Quota:
    """Inclusive [min, max] range of visits a visitor should end up with"""
    min: int
    max: int

    def __post_init__(self):
        if self.min < 0 or self.max < 0:
            raise ValueError(f"Visit quota cannot be negative: ({self.min}, {self.max})")
        if self.min > self.max:
            raise ValueError(
                f"Visit quota minimum {self.min} is greater than maximum {self.max}"
            )


@dataclass
class VisitorLedgerEntry:
    """A visitor's identity, quota and collected visits within one file"""
    account_number: str
    id_number: str
    first_name: str
    last_name: str
    program: str
    quota: Quota
    visits: List[VisitRecord] = field(default_factory=list)

    @property
    def key(self) -> str:
        return visitor_key(self.first_name, self.last_name)

    @property
    def final_count(self) -> int:
        return len(self.visits)

    def identity(self) -> Dict[str, str]:
        return {
            ACCOUNT_NUMBER: self.account_number,
            ID_NUMBER: self.id_number,
            FIRST_NAME: self.first_name,
            LAST_NAME: self.last_name,
            PROGRAM: self.program,
        }


def visitor_key(first_name: str, last_name: str) -> str:
    """Grouping key for a visitor: first and last name joined by a space"""
    return f"{first_name} {last_name}"


@dataclass(frozen=True)
class GenerationPolicy:
    """Constraints applied when synthesizing check-ins for one file"""
    valid_window: Tuple[date, date]
    time_window: Tuple[time, time]
    allowed_weekdays: FrozenSet[int] = frozenset()  # date.weekday() numbers, Monday=0
    can_repeat_days: bool = False
    max_retries: int = 1000

    def __post_init__(self):
        start, end = self.valid_window
        if start > end:
            raise ValueError(f"Invalid date window: {start} is after {end}")
        min_time, max_time = self.time_window
        if min_time > max_time:
            raise ValueError(f"Invalid time window: {min_time} is after {max_time}")
        if self.max_retries < 1:
            raise ValueError(f"max_retries must be at least 1, got {self.max_retries}")

    def for_window(self, start: date, end: date) -> 'GenerationPolicy':
        """Copy of this policy bound to a different date window"""
        return replace(self, valid_window=(start, end))


@dataclass
class PipelineError:
    """Error information"""
    stage: str  # 'extract', 'transform', 'load'
    error_type: str
    message: str
    record_id: Optional[str] = None
    timestamp: datetime = field(default_factory=datetime.now)
    retryable: bool = False


@dataclass
class PipelineResult:
    """Result of pipeline execution"""

    success: bool

    # Statistics
    records_extracted: int = 0
    records_transformed: int = 0
    records_loaded: int = 0

    # Timing
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    duration_seconds: float = 0.0

    # Stage timings
    extract_duration: float = 0.0
    transform_duration: float = 0.0
    load_duration: float = 0.0

    errors: List[PipelineError] = field(default_factory=list)
