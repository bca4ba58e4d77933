from enum import Enum


class CompanyAnalysisType(str, Enum):
    COMPREHENSIVE = "comprehensive"
    VALUATION = "valuation"
    RISKS = "risks"
    OPPORTUNITIES = "opportunities"
    COMPARISON = "comparison"


class MarketInsightType(str, Enum):
    OVERALL_MARKET = "overall_market"
    SECTOR_ANALYSIS = "sector_analysis"
    ECONOMIC_INDICATORS = "economic_indicators"
    RISK_ASSESSMENT = "risk_assessment"


def parse_choice(enum_cls, value: str, field_name: str):
    """Return the enum member for ``value`` or raise ValueError listing the accepted values."""
    try:
        return enum_cls(value)
    except ValueError:
        accepted = ", ".join(member.value for member in enum_cls)
        raise ValueError(f"Invalid {field_name}: '{value}'. Valid options: {accepted}") from None
