from typing import Dict, List, Optional

from jyotish.domain.kundali.divisional.base import BaseDivisionalCalculator
from jyotish.domain.kundali.divisional.d2 import D2Calculator
from jyotish.domain.kundali.divisional.d9 import D9Calculator
from jyotish.domain.kundali.divisional.d10 import D10Calculator
from jyotish.domain.kundali.divisional.schemas import DivisionalChart, DivisionalCharts
from jyotish.domain.kundali.schemas import KundaliChart


class DivisionalBuilder:
    """
    Orchestrates the calculation of all divisional charts
    for a given kundali.
    """

    def __init__(
        self,
        calculators: Optional[List[BaseDivisionalCalculator]] = None
    ):
        # Default supported divisionals
        self.calculators = calculators or [
            D2Calculator(),
            D9Calculator(),
            D10Calculator(),
        ]

    def build(
        self,
        kundali: KundaliChart
    ) -> DivisionalCharts:
        """
        Build all supported divisional charts.
        """
        charts: Dict[str, DivisionalChart] = {}

        for calculator in self.calculators:
            chart = calculator.calculate(kundali)
            charts[chart.chart_type] = chart

        return DivisionalCharts(charts=charts)
