from StockMarket.Domain.prompts.registry import register_prompt

SYSTEM_V1 = """You are an expert financial analyst with deep experience in equity research, \
valuation and market analysis. You are preparing a {analysis_type} analysis of {subject}.

Stay on the {analysis_type} analysis; do not drift into other analysis types.
Base every statement on the data provided, clearly separate facts from interpretation,
and state explicitly when a data point is marked as unavailable."""


COMPANY_COMPREHENSIVE_V1 = """Provide a comprehensive analysis of {ticker} covering:
1. Business overview and market position
2. Financial health: profitability, liquidity and leverage
3. Valuation relative to the current price
4. Key strengths and weaknesses
5. Overall outlook"""

COMPANY_VALUATION_V1 = """Provide a valuation analysis of {ticker} covering:
1. Current valuation multiples (P/E, P/B, EV/EBITDA and others present in the data)
2. Whether the stock looks undervalued, fairly valued or overvalued, and why
3. The assumptions the current price implies
4. Key valuation risks"""

COMPANY_RISKS_V1 = """Provide a risk assessment of {ticker} covering:
1. Financial risks (leverage, liquidity, cash burn)
2. Business and competitive risks
3. Market and valuation risks
4. Warning signs visible in the data"""

COMPANY_OPPORTUNITIES_V1 = """Identify the opportunities for {ticker} covering:
1. Growth drivers visible in the data
2. Margin or efficiency improvements
3. Valuation upside scenarios
4. Catalysts that could re-rate the stock"""

COMPANY_COMPARISON_V1 = """Compare {ticker} with its peers covering:
1. Relative valuation
2. Relative profitability and growth
3. Relative balance-sheet strength
4. Which company looks best positioned, and why
Peers marked as unavailable must be mentioned but not analysed."""


MARKET_OVERALL_V1 = """Provide an overall market assessment covering:
1. Performance of the instruments in the data
2. Current market trends and breadth
3. Notable divergences between instruments
4. Short-term outlook"""

MARKET_SECTOR_V1 = """Provide a sector analysis covering:
1. Which sectors or instruments lead and which lag
2. Rotation signals visible in the data
3. Sector-level risks and opportunities"""

MARKET_ECONOMIC_V1 = """Analyse what the data implies about economic conditions covering:
1. Growth and risk appetite signals
2. Rate and inflation sensitivity of the instruments
3. Indicators worth monitoring next"""

MARKET_RISK_V1 = """Provide a market risk assessment covering:
1. Volatility and drawdown signals
2. Concentration and valuation risks
3. Tail risks and hedging considerations"""


PROMPTS = [
    register_prompt("analysis.system", kind="system", required_vars={"analysis_type", "subject"})(SYSTEM_V1),
    register_prompt("company_analysis.comprehensive", required_vars={"ticker"})(COMPANY_COMPREHENSIVE_V1),
    register_prompt("company_analysis.valuation", required_vars={"ticker"})(COMPANY_VALUATION_V1),
    register_prompt("company_analysis.risks", required_vars={"ticker"})(COMPANY_RISKS_V1),
    register_prompt("company_analysis.opportunities", required_vars={"ticker"})(COMPANY_OPPORTUNITIES_V1),
    register_prompt("company_analysis.comparison", required_vars={"ticker"})(COMPANY_COMPARISON_V1),
    register_prompt("market_insights.overall_market")(MARKET_OVERALL_V1),
    register_prompt("market_insights.sector_analysis")(MARKET_SECTOR_V1),
    register_prompt("market_insights.economic_indicators")(MARKET_ECONOMIC_V1),
    register_prompt("market_insights.risk_assessment")(MARKET_RISK_V1),
]
