import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from jyotish.config import Settings, settings as default_settings
from jyotish.domain.dasha.scheduler import DashaScheduler
from jyotish.domain.dasha.schemas import DashaSelection, DashaTimeline
from jyotish.domain.kundali.constants import CelestialBody
from jyotish.domain.kundali.derived.derived_builder import DerivedBuilder
from jyotish.domain.kundali.derived.schemas import (
    Aspect,
    DignityState,
    Dosha,
    HouseStrength,
    PlanetStrength,
    YogaMatch,
)
from jyotish.domain.kundali.divisional.divisional_builder import DivisionalBuilder
from jyotish.domain.kundali.divisional.schemas import DivisionalChart
from jyotish.domain.kundali.engine import BirthInput, KundaliEngine
from jyotish.domain.kundali.schemas import KundaliChart
from jyotish.domain.matching.kuta import CompatibilityScorer
from jyotish.domain.matching.schemas import CompatibilityResult
from jyotish.domain.transits.gochar_calculator import GocharCalculator
from jyotish.domain.transits.schemas import Gochar
from jyotish.domain.transits.transit_engine import TransitEngine
from jyotish.ephemeris.oracle import EphemerisOracle

logger = logging.getLogger(__name__)


class KundaliReport(BaseModel):
    """
    Everything derived for one birth, ready for `model_dump(mode="json")`.
    """

    birth: BirthInput
    evaluated_at: datetime
    ayanamsa: str
    ayanamsa_value: float
    chart: KundaliChart
    divisional: Dict[str, DivisionalChart] = Field(default_factory=dict)
    dasha: DashaSelection
    dasha_timeline: DashaTimeline
    yogas: List[YogaMatch] = Field(default_factory=list)
    dignities: Dict[CelestialBody, DignityState] = Field(default_factory=dict)
    doshas: List[Dosha] = Field(default_factory=list)
    aspects: List[Aspect] = Field(default_factory=list)
    house_strengths: Dict[int, HouseStrength] = Field(default_factory=dict)
    strengths: Dict[CelestialBody, PlanetStrength] = Field(default_factory=dict)
    gochar: Gochar
    compatibility: Optional[CompatibilityResult] = None


class ReportService:
    """
    Builds a deterministic kundali report.

    This service:
    - Generates the D1 chart through the ephemeris oracle
    - Runs derived, divisional, dasha and transit calculators
    - Scores compatibility when a partner birth is supplied
    """

    def __init__(
        self,
        oracle: EphemerisOracle,
        settings: Optional[Settings] = None,
    ):
        settings = settings or default_settings
        self.engine = KundaliEngine(oracle, settings)
        self.derived_builder = DerivedBuilder(settings)
        self.divisional_builder = DivisionalBuilder()
        self.dasha_scheduler = DashaScheduler(settings)
        self.transit_engine = TransitEngine(self.engine)
        self.gochar_calculator = GocharCalculator()
        self.compatibility_scorer = CompatibilityScorer()

    def generate(
        self,
        birth: BirthInput,
        partner: Optional[BirthInput] = None,
        evaluation_time: Optional[datetime] = None,
    ) -> KundaliReport:
        """
        Build the full report. `partner` is scored as the girl's chart.
        """
        if evaluation_time is None:
            evaluation_time = datetime.now(timezone.utc)

        chart = self.engine.generate(birth)

        # ─────────────────────────────────────────────
        # Derived astrology
        # ─────────────────────────────────────────────

        derived = self.derived_builder.build(chart)
        divisional = self.divisional_builder.build(chart)

        # ─────────────────────────────────────────────
        # Dasha
        # ─────────────────────────────────────────────

        birth_utc = birth.to_utc()
        moon = chart.placement(CelestialBody.MOON)
        dasha = self.dasha_scheduler.calculate(birth_utc, moon.longitude, evaluation_time)
        timeline = self.dasha_scheduler.timeline(birth_utc, moon.longitude)

        # ─────────────────────────────────────────────
        # Transits
        # ─────────────────────────────────────────────

        transit = self.transit_engine.calculate(evaluation_time)
        gochar = self.gochar_calculator.calculate(chart, transit)

        # ─────────────────────────────────────────────
        # Matching
        # ─────────────────────────────────────────────

        compatibility = None
        if partner is not None:
            partner_chart = self.engine.generate(partner)
            compatibility = self.compatibility_scorer.score(chart, partner_chart)

        logger.info(
            f"Report generated: {len(derived.yogas)} yogas, "
            f"dasha {dasha.maha.lord.value}/{dasha.antar.lord.value}"
        )

        return KundaliReport(
            birth=birth,
            evaluated_at=evaluation_time,
            ayanamsa=chart.ayanamsa,
            ayanamsa_value=chart.ayanamsa_value,
            chart=chart,
            divisional=divisional.charts,
            dasha=dasha,
            dasha_timeline=timeline,
            yogas=derived.yogas,
            dignities={body: info.state for body, info in derived.dignities.items()},
            doshas=derived.doshas,
            aspects=derived.aspects,
            house_strengths=derived.house_strengths,
            strengths=derived.strengths,
            gochar=gochar,
            compatibility=compatibility,
        )
