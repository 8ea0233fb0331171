"""
Gemini-backed helpers: natural-language expense parsing, spending insights
and a small chat assistant.

The model only ever translates text into expense records or comments on
data we pass it; totals always come from SummaryCalculator.
"""
import json
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

import google.generativeai as genai
from pydantic import ValidationError

from smartspend.core.config import settings
from smartspend.core.exceptions import AIServiceError
from smartspend.models.expense import ExpenseCreate
from smartspend.utils.analyzer import ExpenseSummary

logger = logging.getLogger(__name__)

ASSISTANT_INSTRUCTION = (
    "You are a helpful financial assistant. Keep insights brief (under 150 words) "
    "and use bullet points."
)

PARSE_RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "expenses": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "item": {"type": "STRING"},
                    "amount": {"type": "NUMBER"},
                    "category": {"type": "STRING"},
                    "date": {"type": "STRING", "description": "YYYY-MM-DD format"},
                },
                "required": ["item", "amount", "category", "date"],
            },
        }
    },
}

MISSING_KEY_INSIGHT = "API Key missing. Unable to generate insights."
NO_EXPENSES_INSIGHT = "No expenses recorded yet. Add some expenses to see insights!"
EMPTY_INSIGHT = "Could not generate insights at this time."
FAILED_INSIGHT = "Unable to generate insights due to an error."
FAILED_CHAT = "Sorry, I couldn't answer that right now. Please try again."

RECENT_EXPENSE_LIMIT = 50


class GeminiService:
    def __init__(self, api_key: Optional[str] = None, model_name: Optional[str] = None):
        self._api_key = settings.GEMINI_API_KEY if api_key is None else api_key
        self._model_name = model_name or settings.GEMINI_MODEL
        self._parser_model = None
        self._assistant_model = None
        if self._api_key:
            self._configure_genai()

    def _configure_genai(self):
        genai.configure(api_key=self._api_key)
        self._parser_model = genai.GenerativeModel(self._model_name)
        self._assistant_model = genai.GenerativeModel(
            self._model_name,
            system_instruction=ASSISTANT_INSTRUCTION,
        )

    @property
    def configured(self) -> bool:
        return bool(self._api_key)

    def parse_expense_text(self, text: str, reference_date: Optional[str] = None) -> List[ExpenseCreate]:
        """
        Extract expense records from free text (typed or dictated).

        Items without an explicit date get ``reference_date`` (today, UTC, by
        default); relative dates such as "yesterday" are resolved against it.

        Raises:
            AIServiceError: missing API key, failed request or unusable reply
        """
        if not self.configured:
            raise AIServiceError("API Key is missing")

        date_context = reference_date or datetime.utcnow().strftime("%Y-%m-%d")
        prompt = (
            f'Reference date: {date_context}. Extract expenses from the following text: "{text}".\n'
            f"If a date is not explicitly mentioned for an item, use the reference date ({date_context}).\n"
            'If relative dates like "yesterday" are used, calculate them based on the reference date.\n'
            "Categorize each item logically (e.g., Food, Transport, Utilities, Entertainment, Shopping, Health)."
        )

        try:
            response = self._parser_model.generate_content(
                prompt,
                generation_config=genai.GenerationConfig(
                    response_mime_type="application/json",
                    response_schema=PARSE_RESPONSE_SCHEMA,
                ),
            )
            payload = json.loads(response.text or '{"expenses": []}')
        except json.JSONDecodeError as e:
            logger.error(f"Gemini returned invalid JSON: {e}")
            raise AIServiceError("AI service returned an invalid response")
        except Exception as e:
            logger.error(f"Expense parsing failed: {str(e)}")
            raise AIServiceError("Failed to process expenses")

        parsed: List[ExpenseCreate] = []
        for raw in payload.get("expenses", []):
            try:
                parsed.append(ExpenseCreate(**{"date": date_context, **raw}))
            except (ValidationError, TypeError) as e:
                logger.warning(f"Skipping unusable parsed expense {raw!r}: {e}")
        return parsed

    def _context_block(self, expenses: List[Dict[str, Any]], summary: ExpenseSummary) -> str:
        recent = sorted(expenses, key=lambda e: e.get("createdAt", 0), reverse=True)[:RECENT_EXPENSE_LIMIT]
        top = ", ".join(
            f"{entry.name} ({entry.percentage:.1f}%)" for entry in summary.category_breakdown[:3]
        )
        compact = [
            {"i": e.get("item"), "a": e.get("amount"), "c": e.get("category"), "d": e.get("date")}
            for e in recent
        ]
        return (
            "Summary:\n"
            f"- Daily Total (Today): ₹{summary.daily_total:.2f}\n"
            f"- Weekly Total (Last 7 days): ₹{summary.weekly_total:.2f}\n"
            f"- Monthly Total (Last 30 days): ₹{summary.monthly_total:.2f}\n"
            f"- Top Categories: {top}\n\n"
            f"Recent Transactions (JSON):\n{json.dumps(compact)}\n"
        )

    def generate_insights(self, expenses: List[Dict[str, Any]], summary: ExpenseSummary) -> str:
        if not self.configured:
            return MISSING_KEY_INSIGHT
        if not expenses:
            return NO_EXPENSES_INSIGHT

        prompt = (
            "Analyze the following expense data and summary statistics.\n\n"
            f"{self._context_block(expenses, summary)}\n"
            "Task:\n"
            "Identify spending patterns, unusual spikes, and opportunities to save.\n"
            "Be concise, encouraging, and actionable.\n"
            "Format the response using Markdown.\n"
            "Focus on specific advice based on the data provided.\n"
            "Use Indian Rupee (₹) symbol in your response."
        )
        try:
            response = self._assistant_model.generate_content(prompt)
            return response.text or EMPTY_INSIGHT
        except Exception as e:
            logger.error(f"Insight generation failed: {str(e)}")
            return FAILED_INSIGHT

    def chat(self, message: str, expenses: List[Dict[str, Any]], summary: ExpenseSummary) -> str:
        """Answer a user question using only the provided spending data."""
        if not self.configured:
            return MISSING_KEY_INSIGHT

        prompt = (
            "Answer the user's question using only the expense data below. "
            "If the data does not contain the answer, say so.\n\n"
            f"{self._context_block(expenses, summary)}\n"
            f"Question: {message}"
        )
        try:
            response = self._assistant_model.generate_content(prompt)
            return response.text or FAILED_CHAT
        except Exception as e:
            logger.error(f"Chat request failed: {str(e)}")
            return FAILED_CHAT
