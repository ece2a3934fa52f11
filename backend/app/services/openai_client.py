"""
OpenAI chat client that simplifies a recipe down to its most important ingredients.

The model is asked for a JSON object; replies wrapped in markdown code fences
are unwrapped first, and anything that still fails to parse is reported as
``None`` so callers can fall back to a naive split.
"""

import json
import logging
import re
from typing import List, Optional, Sequence, Union

from openai import AsyncOpenAI, OpenAIError
from pydantic import ValidationError

from ..core.errors import MissingCredentialsError
from ..models.recipe import (
    Instructions,
    NotableIngredient,
    PlainTextInstructions,
    SimpleIngredient,
    SimplificationResult,
    SimplifierRequest,
    SimplifierResponse,
    StepListInstructions,
)

log = logging.getLogger(__name__)
MODEL = "gpt-3.5-turbo"

SYSTEM_MESSAGE = (
    "You are an assistant that simplifies recipes. Select the {top} most important "
    "non-staple ingredients, and rewrite the instructions accordingly using only those "
    "ingredients and the staples provided. Make sure the instructions do not include any "
    "ingredients other than staples and the {top} you chose."
)

_OPENING_FENCE = re.compile(r"^```(?:json)?\s*")
_CLOSING_FENCE = re.compile(r"```\s*$")
_LINE_BREAK = re.compile(r"\r?\n")


def build_messages(request: SimplifierRequest, top: int = 5) -> List[dict]:
    ingredient_lines = "\n".join(f"- {ing.quantity} {ing.name}" for ing in request.ingredients)
    staple_lines = "\n".join(f"- {s}" for s in request.staples)
    user = (
        f"Ingredients:\n{ingredient_lines}\n"
        f"Staples:\n{staple_lines}\n"
        f"Instructions:\n{request.instructions}\n"
        f"\nRespond with a JSON object containing these three fields exactly:\n"
        f'1. "ingredients": an array of objects with "name" and "quantity" for the top {top} ingredients you selected.\n'
        f'2. "discardedIngredients": an array of objects with "name" and "quantity" for the remaining non-staple ingredients you did not choose.\n'
        f'3. "instructions": the rewritten instructions using only the chosen ingredients and staples.\n'
        f"No additional text or fields."
    )
    return [
        {"role": "system", "content": SYSTEM_MESSAGE.format(top=top)},
        {"role": "user", "content": user},
    ]


def strip_code_fences(content: str) -> str:
    """Remove a surrounding ``` or ```json fence from a model reply."""
    content = content.strip()
    if content.startswith("```"):
        content = _CLOSING_FENCE.sub("", _OPENING_FENCE.sub("", content)).strip()
    return content


def parse_simplifier_reply(content: str) -> Optional[SimplifierResponse]:
    """Decode the model reply, returning None when it is not the expected JSON."""
    cleaned = strip_code_fences(content or "")
    try:
        return SimplifierResponse.model_validate(json.loads(cleaned))
    except (ValueError, ValidationError) as e:
        log.warning(f"⚠️ Could not parse simplifier reply: {e}")
        return None


def cap_reply(parsed: SimplifierResponse, top: int = 5) -> SimplifierResponse:
    """Keep at most ``top`` chosen ingredients, moving the rest to the front of the discarded list."""
    if len(parsed.ingredients) <= top:
        return parsed
    log.warning(f"⚠️ Simplifier chose {len(parsed.ingredients)} ingredients, keeping the first {top}")
    return parsed.model_copy(
        update={
            "ingredients": parsed.ingredients[:top],
            "discarded_ingredients": parsed.ingredients[top:] + parsed.discarded_ingredients,
        }
    )


def coerce_instructions(value: Union[str, Sequence[str], None]) -> Instructions:
    """Best-effort conversion of model instructions into text or a list of steps."""
    if value is None:
        return PlainTextInstructions(text="")
    if not isinstance(value, str):
        return StepListInstructions(steps=[str(step).strip() for step in value if str(step).strip()])

    try:
        decoded = json.loads(value)
    except ValueError:
        decoded = None
    if isinstance(decoded, list):
        return coerce_instructions(decoded)

    lines = [line.strip() for line in _LINE_BREAK.split(value) if line.strip()]
    if len(lines) > 1:
        return StepListInstructions(steps=lines)
    return PlainTextInstructions(text=value.strip())


def fallback_split(
    notable: List[NotableIngredient], instructions: str, top: int = 5
) -> SimplificationResult:
    """Keep the first ``top`` ingredients and leave the instructions untouched."""
    return SimplificationResult(
        chosen_ingredients=list(notable[:top]),
        discarded_ingredients=list(notable[top:]),
        instructions=PlainTextInstructions(text=instructions),
        simplified=False,
    )


def _lookup(notable: List[NotableIngredient], ingredient: SimpleIngredient) -> NotableIngredient:
    for candidate in notable:
        if candidate.name == ingredient.name:
            return candidate.model_copy(update={"quantity": ingredient.quantity})
    return NotableIngredient(name=ingredient.name, quantity=ingredient.quantity)


class RecipeSimplifier:
    def __init__(
        self,
        api_key: str,
        model: str = MODEL,
        temperature: float = 0.7,
        top: int = 5,
        client: Optional[AsyncOpenAI] = None,
    ):
        self.api_key = api_key
        self.model = model
        self.temperature = temperature
        self.top = top
        self._client = client

    @property
    def client(self) -> AsyncOpenAI:
        if self._client is None:
            if not self.api_key:
                raise MissingCredentialsError("openai_api_key")
            self._client = AsyncOpenAI(api_key=self.api_key)
        return self._client

    async def complete(self, request: SimplifierRequest) -> str:
        """Send one simplification request and return the raw reply text."""
        completion = await self.client.chat.completions.create(
            model=self.model,
            messages=build_messages(request, self.top),
            temperature=self.temperature,
        )
        return completion.choices[0].message.content or ""

    async def simplify(
        self, notable: List[NotableIngredient], staples: List[str], instructions: str
    ) -> SimplificationResult:
        """Simplify a recipe, degrading to ``fallback_split`` on any failure."""
        request = SimplifierRequest(
            ingredients=[ing.to_simple() for ing in notable],
            staples=staples,
            instructions=instructions,
        )
        try:
            reply = await self.complete(request)
        except (MissingCredentialsError, OpenAIError) as e:
            log.error(f"❌ Simplifier unavailable: {e}")
            return fallback_split(notable, instructions, self.top)

        parsed = parse_simplifier_reply(reply)
        if parsed is None:
            log.warning("⚠️ Falling back to naive ingredient split")
            return fallback_split(notable, instructions, self.top)
        parsed = cap_reply(parsed, self.top)

        log.info(f"✅ Simplifier kept {len(parsed.ingredients)} of {len(notable)} ingredients")
        return SimplificationResult(
            chosen_ingredients=[_lookup(notable, ing) for ing in parsed.ingredients],
            discarded_ingredients=[_lookup(notable, ing) for ing in parsed.discarded_ingredients],
            instructions=coerce_instructions(parsed.instructions),
            simplified=True,
        )
