from __future__ import annotations

from collections import Counter
from typing import Any


def compute_analytics(events: list[dict[str, Any]]) -> dict[str, Any]:
    searches = [e for e in events if e["type"] == "search"]
    batches = [e for e in events if e["type"] == "batch_search"]
    total = len(searches)

    # Average response time
    times = [s["response_time_ms"] for s in searches if "response_time_ms" in s]
    avg_time = round(sum(times) / len(times), 1) if times else 0.0

    # Top queries, grouped by normalized text so "Café" and "cafe" count together
    query_counter: Counter[str] = Counter()
    for s in searches:
        query_counter[s.get("normalized_query") or s.get("query", "unknown")] += 1
    top_queries = [{"query": q, "count": c} for q, c in query_counter.most_common(10)]

    # Outcomes
    outcome_counter: Counter[str] = Counter(s.get("outcome", "ok") for s in searches)
    zero_results = sum(1 for s in searches if s.get("results_returned", 0) == 0)

    # Cache stats
    cache_hits = sum(1 for s in searches if s.get("cache_hit"))
    cache_misses = total - cache_hits

    return {
        "total_searches": total,
        "total_batches": len(batches),
        "avg_response_time_ms": avg_time,
        "top_queries": top_queries,
        "outcomes": dict(outcome_counter),
        "upstream_errors": outcome_counter.get("upstream_error", 0),
        "zero_result_rate": round(zero_results / total * 100, 1) if total else 0.0,
        "cache_stats": {
            "hits": cache_hits,
            "misses": cache_misses,
            "hit_rate": round(cache_hits / total * 100, 1) if total else 0.0,
        },
    }
