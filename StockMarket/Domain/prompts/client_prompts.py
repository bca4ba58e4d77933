from StockMarket.Domain.prompts.registry import register_prompt

ANALYZE_COMPANY_DATA_V1 = """Please analyze the following company:
Ticker: {ticker}

Company Information:
{company_facts}

Recent Price Snapshot:
{price_snapshot}"""

ANALYZE_COMPANY_ASK_V1 = (
    "Provide a comprehensive financial analysis of this company, including its strengths, "
    "weaknesses, opportunities, and risks based on this data."
)

MARKET_OVERVIEW_V1 = """Please provide a comprehensive market overview based on the latest data available.

Include:
1. Major market indices performance
2. Sector performance
3. Key economic indicators
4. Current market trends
5. Significant market events

Please make this analysis concise yet thorough, highlighting the most important factors affecting the markets today."""

ANALYZE_CRYPTO_DATA_V1 = """Please analyze the following cryptocurrency:
Ticker: {ticker}

Current Snapshot:
{snapshot}

Last 30 Days Price History:
{prices}"""

ANALYZE_CRYPTO_ASK_V1 = (
    "Provide a comprehensive analysis of this cryptocurrency, including price trends, volatility, "
    "and major factors affecting its value. Compare its performance to major cryptocurrencies "
    "like Bitcoin and Ethereum where relevant."
)

ANALYZE_STATEMENTS_DATA_V1 = """Please analyze the financial statements and metrics for the following company:
Ticker: {ticker}

Company Information:
{company_facts}

Financial Metrics:
{metrics_snapshot}

Financial Statements ({period}):
{financials}"""

ANALYZE_STATEMENTS_ASK_V1 = """Based on these financial statements and metrics, please provide:

1. A summary of the company's financial health
2. Analysis of revenue trends, profitability, and growth
3. Assessment of balance sheet strength and liquidity
4. Cash flow analysis
5. Key financial ratios interpretation
6. Noteworthy aspects of the financial statements
7. Areas of concern or potential red flags
8. Overall financial outlook"""


PROMPTS = [
    register_prompt("client.analyze_company.data", required_vars={"ticker", "company_facts", "price_snapshot"})(
        ANALYZE_COMPANY_DATA_V1
    ),
    register_prompt("client.analyze_company.ask")(ANALYZE_COMPANY_ASK_V1),
    register_prompt("client.market_overview")(MARKET_OVERVIEW_V1),
    register_prompt("client.analyze_crypto.data", required_vars={"ticker", "snapshot", "prices"})(ANALYZE_CRYPTO_DATA_V1),
    register_prompt("client.analyze_crypto.ask")(ANALYZE_CRYPTO_ASK_V1),
    register_prompt(
        "client.analyze_financial_statements.data",
        required_vars={"ticker", "company_facts", "metrics_snapshot", "period", "financials"},
    )(ANALYZE_STATEMENTS_DATA_V1),
    register_prompt("client.analyze_financial_statements.ask")(ANALYZE_STATEMENTS_ASK_V1),
]
