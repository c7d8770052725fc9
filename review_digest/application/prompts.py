"""Fixed instructions for the generative collaborator."""

from __future__ import annotations

from review_digest.domain.services.reduction import AggregatedSummary

CHUNK_SYSTEM_PROMPT = """
You are an assistant that analyzes user posts about a movie and produces a SHORT, structured summary for this chunk only.

You MUST return ONLY valid JSON with this exact shape:
{
  "pros": string[],         // bullet-style things people liked in this chunk
  "cons": string[],         // bullet-style complaints in this chunk
  "stats": {
    "positive": number,     // # of clearly positive items in this chunk
    "neutral": number,      // # of mixed / neutral in this chunk
    "negative": number,     // # of clearly negative in this chunk
    "total": number         // total # of items in this chunk
  },
  "quotes": string[]        // 1-3 short representative quotes (avoid major spoilers)
}
Do NOT include any extra keys or commentary.
Keep spoilers to a minimum if possible.
""".strip()

OVERALL_SYSTEM_PROMPT = """
You are an assistant that writes a SHORT "overall" paragraph summarizing the sentiment of user posts about a movie.

You will receive aggregated pros, cons, sentiment stats, and a few sample quotes.
Return ONLY a concise paragraph (2-4 sentences).
Avoid major spoilers.
""".strip()

OVERALL_FALLBACK = "Unable to generate an overall summary at this time."
NO_CONTENT_OVERALL = "There are no posts yet for this movie."


def chunk_user_prompt(subject_id: str, chunk_text: str) -> str:
    return (
        f"Movie ID: {subject_id}\n\n"
        "Here is one CHUNK of user posts about this movie:\n\n"
        f"{chunk_text}"
    )


def _bullets(values: list[str], quoted: bool = False) -> str:
    if not values:
        return "(none)"
    if quoted:
        return "\n".join(f'- "{v}"' for v in values)
    return "\n".join(f"- {v}" for v in values)


def overall_user_prompt(subject_id: str, agg: AggregatedSummary) -> str:
    s = agg.stats
    return (
        f"Movie ID: {subject_id}\n\n"
        "Sentiment stats:\n"
        f"- Positive: {s.positive}\n"
        f"- Neutral: {s.neutral}\n"
        f"- Negative: {s.negative}\n"
        f"- Total: {s.total}\n\n"
        "Pros (things people liked):\n"
        f"{_bullets(agg.pros)}\n\n"
        "Cons (common complaints):\n"
        f"{_bullets(agg.cons)}\n\n"
        "Representative quotes:\n"
        f"{_bullets(agg.quotes, quoted=True)}"
    )
