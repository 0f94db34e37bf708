"""Finance assistant backed by the Gemini text-generation API.

The remote call is best effort: without an API key, or on any request or
response failure, the answer comes from local keyword-matched templates.
"""

from collections.abc import Sequence

import requests

from spendwise.config import Settings
from spendwise.currency import DEFAULT_CONVERSION_RATE, SYMBOLS, to_display
from spendwise.domain.models import Transaction
from spendwise.domain.summary import Summary, compute_summary, top_category
from spendwise.logging_setup import get_logger

logger = get_logger(__name__)

API_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"
REQUEST_TIMEOUT = 30

NO_DATA_RESPONSE = (
    "I don't see any expense data yet. Start tracking your expenses, and I'll provide personalized saving tips."
)

HELP_RESPONSE = """I'm here to help with your finances! You can ask me to:
- Analyze your expenses
- Provide saving tips
- Help with budget planning
- Identify areas to cut costs"""


def build_prompt(
    question: str,
    transactions: Sequence[Transaction],
    summary: Summary,
    currency: str,
    rate: float = DEFAULT_CONVERSION_RATE,
) -> str:
    """Build the prompt sent to the text-generation API.

    Args:
        question: User question.
        transactions: Current transactions.
        summary: Summary of the transactions.
        currency: Display currency code.
        rate: Base to display conversion rate.

    Returns:
        Prompt text with the user's financial context.
    """
    top = top_category(summary)
    return (
        "You are a helpful financial assistant. The user has the following financial data:\n"
        f"- Number of expenses: {len(transactions)}\n"
        f"- Total spending: {SYMBOLS[currency]}{to_display(summary.total, currency, rate):.2f}\n"
        f"- Top spending category: {top[0] if top else 'unknown'}\n\n"
        f"The user's query is: {question}\n\n"
        "Give helpful, concise financial advice based on this information. If they're asking about saving money, "
        "budgeting, expense analysis, or financial planning, tailor your response to their specific situation "
        "using the data provided."
    )


def fetch_generated_response(prompt: str, api_key: str, model: str = "gemini-pro") -> str | None:
    """Request a completion from the Gemini API.

    Args:
        prompt: Prompt text.
        api_key: Gemini API key.
        model: Model name.

    Returns:
        Generated text, or None if the response holds no text.

    Raises:
        requests.RequestException: If API request fails.
    """
    headers = {
        "Content-Type": "application/json",
        "x-goog-api-key": api_key,
    }
    body = {
        "contents": [{"parts": [{"text": prompt}]}],
        "generationConfig": {
            "temperature": 0.7,
            "topK": 40,
            "topP": 0.95,
            "maxOutputTokens": 800,
        },
    }

    response = requests.post(
        f"{API_BASE_URL}/{model}:generateContent",
        headers=headers,
        json=body,
        timeout=REQUEST_TIMEOUT,
    )
    response.raise_for_status()

    try:
        return response.json()["candidates"][0]["content"]["parts"][0]["text"] or None
    except (ValueError, KeyError, IndexError, TypeError):
        return None


def fallback_response(
    question: str,
    transactions: Sequence[Transaction],
    summary: Summary,
    currency: str,
    rate: float = DEFAULT_CONVERSION_RATE,
) -> str:
    """Pick a canned answer by keyword.

    Args:
        question: User question.
        transactions: Current transactions, most recently added first.
        summary: Summary of the transactions.
        currency: Display currency code.
        rate: Base to display conversion rate.

    Returns:
        Answer text.
    """
    if not transactions:
        return NO_DATA_RESPONSE

    query = question.lower()
    symbol = SYMBOLS[currency]

    def money(amount: float) -> str:
        return f"{symbol}{to_display(amount, currency, rate):.2f}"

    top = top_category(summary)
    top_name = top[0] if top else "unknown"

    if "save money" in query or "saving tips" in query:
        top_amount = top[1] if top else 0.0
        return f"""Based on your spending, here are some tips to save money:

1. Your highest expense category is {top_name} ({money(top_amount)}). Try to reduce spending in this area.
2. Set a budget for each category and stick to it.
3. Look for recurring subscriptions you might not need.
4. Consider meal planning to reduce food expenses.
5. Use cashback apps or credit cards with rewards for your regular purchases."""

    if "analyze" in query or "spending" in query or "expenses" in query:
        latest = transactions[0]
        if len(transactions) > 3:
            recent = f'Your most recent expense was "{latest.description}" for {money(latest.amount)}.'
        else:
            recent = "You have just started tracking expenses."
        if any(txn.amount > summary.total * 0.3 for txn in transactions):
            distribution = "I notice some large one-time expenses. Consider spreading out big purchases when possible."
        else:
            distribution = "Your expenses seem evenly distributed, which is good for budgeting!"
        return f"""Here's a quick analysis of your expenses:

1. You've tracked {len(transactions)} expenses totaling {money(summary.total)}.
2. Your biggest expense category is {top_name}.
3. {recent}
4. {distribution}"""

    if "budget" in query or "plan" in query:
        return f"""To create an effective budget plan:

1. Aim to save 20% of your income.
2. Allocate 50% for necessities (housing, food, utilities).
3. Use 30% for discretionary spending.
4. Based on your current spending patterns, you might want to reduce your {top[0] if top else 'highest'} category expenses.
5. Set specific savings goals for motivation."""

    return HELP_RESPONSE


def ask(question: str, transactions: Sequence[Transaction], settings: Settings) -> str:
    """Answer a finance question about the user's transactions.

    Args:
        question: User question.
        transactions: Current transactions, most recently added first.
        settings: Application settings (API key, model, currency).

    Returns:
        Generated answer, or a local fallback answer.
    """
    summary = compute_summary(transactions)

    if settings.assistant_api_key:
        prompt = build_prompt(question, transactions, summary, settings.currency, settings.conversion_rate)
        try:
            text = fetch_generated_response(prompt, settings.assistant_api_key, settings.assistant_model)
        except requests.RequestException as e:
            logger.warning("Assistant request failed, using local answer: %s", e)
        else:
            if text:
                return text
            logger.warning("Assistant response had no text, using local answer")

    return fallback_response(question, transactions, summary, settings.currency, settings.conversion_rate)
