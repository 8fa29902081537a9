from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional, Tuple

from ..core.constants import DEFAULT_BODY_OF_WATER
from ..core.enums import PhotoType, TriState

# The fixed subset of task flags the completion percentage is computed over.
TRACKED_TASKS: Tuple[str, ...] = (
    "pool_vacuumed",
    "pool_brushed",
    "skimmers_empty",
    "tiles_cleaned",
    "furniture_arranged",
    "cleaned_strainer",
    "backwash_filters",
    "cleaned_cartridges",
    "empty_trash",
    "broom_bucket_hose_deck",
    "furniture_organized",
    "skim_water_surface",
)

UNTRACKED_TASKS: Tuple[str, ...] = ("calibrated_chemical_controller", "added_water")

EQUIPMENT_READINGS: Tuple[str, ...] = ("flowrate", "filter_pressure", "water_temp", "controller_orp", "controller_ph")

SUPPLY_ORDERS: Tuple[str, ...] = (
    "order_chlorine",
    "order_ph_adjusters",
    "order_calcium_hardener",
    "order_sodium_bicarb_alkalinity",
    "order_cyanuric_acid",
    "order_reagents_taylor_drops",
)


@dataclass(frozen=True)
class ChemicalReading:
    """One body of water's measurements. None means not measured, never zero."""

    report_id: int
    body_of_water: str = DEFAULT_BODY_OF_WATER
    chlorine_bromine: Optional[Decimal] = None
    ph: Optional[Decimal] = None
    calcium_hardness: Optional[Decimal] = None
    total_alkalinity: Optional[Decimal] = None
    cyanuric_acid: Optional[Decimal] = None
    salt: Optional[Decimal] = None
    phosphates: Optional[Decimal] = None
    temperature: Optional[Decimal] = None
    reading_time: Optional[datetime] = None
    created_at: Optional[datetime] = None
    reading_id: Optional[int] = None


@dataclass(frozen=True)
class ReportPhoto:
    report_id: int
    photo_url: str
    photo_type: PhotoType
    photo_timestamp: datetime
    description: Optional[str] = None
    gps_location: Optional[str] = None
    created_at: Optional[datetime] = None
    photo_id: Optional[int] = None


@dataclass(frozen=True)
class ServiceTechReport:
    """A technician's service checklist for one visit."""

    user_id: int
    location_id: int
    service_date: datetime
    report_id: Optional[int] = None
    clock_record_id: Optional[int] = None
    service_type: Optional[str] = None
    work_performed: Optional[str] = None
    chemicals_added_notes: Optional[str] = None
    issues_found: Optional[str] = None
    recommendations: Optional[str] = None

    pool_vacuumed: bool = False
    pool_brushed: bool = False
    skimmers_empty: bool = False
    tiles_cleaned: bool = False
    furniture_arranged: bool = False
    cleaned_strainer: bool = False
    backwash_filters: bool = False
    cleaned_cartridges: TriState = TriState.FALSE
    empty_trash: bool = False
    broom_bucket_hose_deck: bool = False
    furniture_organized: bool = False
    skim_water_surface: bool = False

    calibrated_chemical_controller: bool = False
    added_water: bool = False

    flowrate: Decimal = Decimal(0)
    filter_pressure: Decimal = Decimal(0)
    water_temp: Decimal = Decimal(0)
    controller_orp: Decimal = Decimal(0)
    controller_ph: Decimal = Decimal(0)

    order_chlorine: bool = False
    order_ph_adjusters: bool = False
    order_calcium_hardener: bool = False
    order_sodium_bicarb_alkalinity: bool = False
    order_cyanuric_acid: bool = False
    order_reagents_taylor_drops: bool = False
    supplies_needed: Optional[str] = None

    report_sent_to: Optional[str] = None
    customer_rating: Optional[int] = None
    customer_feedback: Optional[str] = None

    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    user_name: Optional[str] = None
    location_name: Optional[str] = None
    location_address: Optional[str] = None
    chemical_readings: Tuple[ChemicalReading, ...] = field(default_factory=tuple)
    photos: Tuple[ReportPhoto, ...] = field(default_factory=tuple)

    json_properties = ("completion_percentage",)

    @property
    def completed_tasks(self) -> int:
        done = 0
        for name in TRACKED_TASKS:
            value = getattr(self, name)
            if value is True or value is TriState.TRUE:
                done += 1
        return done

    @property
    def completion_percentage(self) -> int:
        return (100 * self.completed_tasks) // len(TRACKED_TASKS)


@dataclass(frozen=True)
class FailedReading:
    index: int
    error: str


@dataclass(frozen=True)
class ChecklistSubmission:
    """Outcome of a best-effort report + readings submission."""

    report_id: int
    readings_saved: int = 0
    failed_readings: Tuple[FailedReading, ...] = field(default_factory=tuple)

    @property
    def complete(self) -> bool:
        return not self.failed_readings
