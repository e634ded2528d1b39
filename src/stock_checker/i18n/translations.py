"""User-facing strings, keyed by language tag then message key."""

from __future__ import annotations

from stock_checker.core.models import Language

DEFAULT_LANGUAGE = Language.JA

TRANSLATIONS: dict[str, dict[str, str]] = {
    Language.JA: {
        # Outcome reasons
        "missing_symbol": "銘柄コードが指定されていません",
        "missing_api_key": "APIキーが指定されていません",
        "invalid_symbol": "無効な銘柄コードです",
        "rate_limit_note": "API呼び出し制限に達しました。しばらく待ってから再試行してください。",
        "rate_limit_per_second": (
            "APIレート制限に達しました。1秒あたり1リクエストまでです。"
            "少し待ってから再試行してください。"
        ),
        "quote_not_found": "株価データが見つかりません",
        "upstream_error": "株価データの取得中にエラーが発生しました",
        "malformed_payload": "株価データの形式が不正です",
        "invalid_period": "無効な期間です",
        # Quote labels
        "appTitle": "株価チェッカー",
        "quotePrice": "現在値",
        "quoteChange": "変動額",
        "quoteHigh": "高値",
        "quoteLow": "安値",
        "quoteVolume": "出来高",
        "searching": "検索中...",
        # Chart labels
        "chartTitle": "株価チャート",
        "chartClose": "終値",
        "chartHigh": "高値",
        "chartLow": "安値",
        "chartDataPoints": "データポイント数",
        "chartNoDataInPeriod": "選択期間にデータがありません",
        "chartUnavailable": "チャートを表示できません",
        "period1W": "1週間",
        "period1M": "1ヶ月",
        "period3M": "3ヶ月",
        "period6M": "6ヶ月",
        "period1Y": "1年",
    },
    Language.EN: {
        "missing_symbol": "No ticker symbol was specified",
        "missing_api_key": "No API key was specified",
        "invalid_symbol": "Invalid ticker symbol",
        "rate_limit_note": "API call limit reached. Please wait a while and try again.",
        "rate_limit_per_second": (
            "API rate limit reached. Only 1 request per second is allowed. "
            "Please wait a moment and try again."
        ),
        "quote_not_found": "No stock data found",
        "upstream_error": "An error occurred while fetching stock data",
        "malformed_payload": "The stock data was not in the expected format",
        "invalid_period": "Invalid period",
        "appTitle": "Stock Checker",
        "quotePrice": "Price",
        "quoteChange": "Change",
        "quoteHigh": "High",
        "quoteLow": "Low",
        "quoteVolume": "Volume",
        "searching": "Searching...",
        "chartTitle": "Price Chart",
        "chartClose": "Close",
        "chartHigh": "High",
        "chartLow": "Low",
        "chartDataPoints": "Data points",
        "chartNoDataInPeriod": "No data in the selected period",
        "chartUnavailable": "Chart unavailable",
        "period1W": "1 Week",
        "period1M": "1 Month",
        "period3M": "3 Months",
        "period6M": "6 Months",
        "period1Y": "1 Year",
    },
}


def translate(language: str | None, key: str) -> str:
    """Look up ``key`` for ``language``.

    Unknown languages fall back to Japanese; unknown keys come back as is.
    """
    table = TRANSLATIONS.get(language or DEFAULT_LANGUAGE, TRANSLATIONS[DEFAULT_LANGUAGE])
    return table.get(key, key)
