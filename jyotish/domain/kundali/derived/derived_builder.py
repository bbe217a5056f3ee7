from typing import Optional

from jyotish.config import Settings
from jyotish.domain.kundali.derived.aspect_calculator import AspectCalculator
from jyotish.domain.kundali.derived.dignity import DignityClassifier
from jyotish.domain.kundali.derived.dosha_calculator import DoshaCalculator
from jyotish.domain.kundali.derived.house_calculator import HouseCalculator
from jyotish.domain.kundali.derived.schemas import DerivedAstrology
from jyotish.domain.kundali.derived.strength_calculator import StrengthCalculator
from jyotish.domain.kundali.derived.yogas import PatternDetector
from jyotish.domain.kundali.schemas import KundaliChart


class DerivedBuilder:
    """
    Runs every derived calculator over a D1 chart.

    `settings` reaches the calculators built here; calculators
    passed in are used as given.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        dignity_classifier: Optional[DignityClassifier] = None,
        pattern_detector: Optional[PatternDetector] = None,
        dosha_calculator: Optional[DoshaCalculator] = None,
        aspect_calculator: Optional[AspectCalculator] = None,
        house_calculator: Optional[HouseCalculator] = None,
        strength_calculator: Optional[StrengthCalculator] = None,
    ):
        self.dignity_classifier = dignity_classifier or DignityClassifier()
        self.pattern_detector = pattern_detector or PatternDetector(settings=settings)
        self.dosha_calculator = dosha_calculator or DoshaCalculator()
        self.aspect_calculator = aspect_calculator or AspectCalculator()
        self.house_calculator = house_calculator or HouseCalculator()
        self.strength_calculator = strength_calculator or StrengthCalculator(self.aspect_calculator)

    def build(self, kundali: KundaliChart) -> DerivedAstrology:
        aspects = self.aspect_calculator.calculate(kundali)
        return DerivedAstrology(
            dignities=self.dignity_classifier.classify_chart(kundali),
            yogas=self.pattern_detector.detect(kundali),
            doshas=self.dosha_calculator.calculate(kundali),
            aspects=aspects,
            house_strengths=self.house_calculator.calculate(kundali),
            strengths=self.strength_calculator.calculate(kundali, aspects),
        )
