"""
BBG Lite formatters for MCP tool results

Format handler results as Bloomberg Terminal-inspired text output.
Used by both CLI and MCP adapters for consistent presentation.
"""

from typing import Any


def _price(value: Any) -> str:
    try:
        return f"${float(value):,.2f}"
    except (TypeError, ValueError):
        return "N/A"


def _target(rec: dict[str, Any]) -> str:
    return f"{_price(rec.get('target_from'))} → {_price(rec.get('target_to'))}"


def _rating(rec: dict[str, Any]) -> str:
    rating_from = rec.get('rating_from') or '-'
    rating_to = rec.get('rating_to') or '-'
    return f"{rating_from} → {rating_to}"


def _date(rec: dict[str, Any]) -> str:
    # ISO timestamps: keep the date part
    return (rec.get('time') or '')[:10] or 'N/A'


def _table(recs: list[dict[str, Any]]) -> list[str]:
    lines = [
        f"{'TICKER':<8} {'DATE':<10}  {'BROKERAGE':<24} {'RATING':<26} TARGET",
        "─" * 90,
    ]
    for rec in recs:
        brokerage = (rec.get('brokerage') or '')[:24]
        lines.append(
            f"{rec['ticker']:<8} {_date(rec):<10}  {brokerage:<24} {_rating(rec)[:26]:<26} {_target(rec)}"
        )
    return lines


def format_recommendations(result: dict[str, Any]) -> str:
    """Format fetch_recommendations / load_more_recommendations result.

    Example output:
        RECOMMENDATIONS | TICKER=AAPL | PAGE 2 | 3 loaded (+1)

        TICKER   DATE        BROKERAGE                RATING                     TARGET
        ──────────────────────────────────────────────────────────────────────────────────────────
        AAPL     2025-01-15  Goldman Sachs            Neutral → Buy              $150.00 → $175.00

        MORE: yes | Try: load_more_recommendations()
    """
    if not result.get("success"):
        return f"ERROR: {result.get('error', 'Unknown error')}"

    filters = result.get('filters', {})
    parts = ["RECOMMENDATIONS"]
    if filters.get('ticker'):
        parts.append(f"TICKER={filters['ticker']}")
    if filters.get('rating'):
        parts.append(f"RATING={filters['rating']}")
    parts.append(f"PAGE {result['page']}")

    loaded = f"{result['count']} loaded"
    if result.get('appended') is not None:
        loaded += f" (+{result['appended']})"
    parts.append(loaded)

    lines = [" | ".join(parts), ""]

    if not result['recommendations']:
        lines.append("NO RECOMMENDATIONS FOUND")
    else:
        lines.extend(_table(result['recommendations']))

    lines.append("")
    if result.get('has_more'):
        lines.append("MORE: yes | Try: load_more_recommendations()")
    else:
        lines.append("MORE: no")

    return "\n".join(lines)


def format_stock_detail(result: dict[str, Any]) -> str:
    """Format get_stock_detail result.

    Example output:
        AAPL | Apple Inc. | 2025-01-15

        BROKERAGE:   Goldman Sachs
        ACTION:      upgraded by
        RATING:      Neutral → Buy
        TARGET:      $150.00 → $175.00
    """
    if not result.get("success"):
        return f"ERROR: {result.get('error', 'Unknown error')}"

    stock = result['stock']
    lines = [
        f"{stock['ticker'].upper()} | {stock.get('company') or 'N/A'} | {_date(stock)}",
        "",
        f"BROKERAGE:   {stock.get('brokerage') or 'N/A'}",
        f"ACTION:      {stock.get('action') or 'N/A'}",
        f"RATING:      {_rating(stock)}",
        f"TARGET:      {_target(stock)}",
        "",
        f"Try: get_recommendation_history(\"{stock['ticker']}\")",
    ]
    return "\n".join(lines)


def format_top_stocks(result: dict[str, Any]) -> str:
    """Format get_top_stocks result."""
    if not result.get("success"):
        return f"ERROR: {result.get('error', 'Unknown error')}"

    header = f"TOP RECOMMENDATIONS | {result['count']} stocks"
    if result.get('generated_at'):
        header += f" | generated {result['generated_at']}"

    lines = [header, ""]
    if not result['recommendations']:
        lines.append("NO RECOMMENDATIONS FOUND")
    else:
        for i, rec in enumerate(result['recommendations'], 1):
            lines.append(
                f"{i:>3}. {rec['ticker']:<8} {(rec.get('company') or '')[:28]:<28} "
                f"{_rating(rec)[:26]:<26} {_target(rec)}"
            )
    return "\n".join(lines)


def format_tickers(result: dict[str, Any]) -> str:
    """Format list_tickers result, ten per row."""
    if not result.get("success"):
        return f"ERROR: {result.get('error', 'Unknown error')}"

    tickers = result['tickers']
    lines = [f"TICKERS ({result['count']})", "─" * 70]
    for i in range(0, len(tickers), 10):
        lines.append("  ".join(f"{t:<5}" for t in tickers[i:i + 10]).rstrip())
    return "\n".join(lines)


def format_history(result: dict[str, Any]) -> str:
    """Format get_recommendation_history result."""
    if not result.get("success"):
        return f"ERROR: {result.get('error', 'Unknown error')}"

    lines = [f"{result['ticker']} | TARGET HISTORY", ""]
    if not result['history']:
        lines.append("NO HISTORY FOUND")
    for entry in result['history']:
        lines.append(f"{_date(entry):<10}  {_target(entry)}")
    return "\n".join(lines)


def format_health(result: dict[str, Any]) -> str:
    """Format check_health result."""
    if "status" not in result:
        return f"ERROR: {result.get('error', 'Unknown error')}"

    line = f"SERVICE: {result['status'].upper()}"
    if result.get('version'):
        line += f" | v{result['version']}"
    line += f" | {result['base_url']}"
    return line
