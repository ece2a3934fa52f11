from __future__ import annotations

from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

NO_MATCH_TITLE = "No match found"
MATCH_ERROR_TITLE = "Error finding product"


class ParsedIngredient(BaseModel):
    quantity: str = ""
    unit: str = ""
    name: str

    @property
    def display_quantity(self) -> str:
        return f"{self.quantity} {self.unit}".strip()


class StapleEntry(BaseModel):
    name: str
    quantity: str = ""


class SimpleIngredient(BaseModel):
    """Name/quantity pair exchanged with the simplifier."""

    name: str
    quantity: str = ""


class CatalogMatch(BaseModel):
    title: str = NO_MATCH_TITLE
    link: Optional[str] = None
    thumbnail: Optional[str] = None
    price: Optional[str] = None


class NotableIngredient(BaseModel):
    name: str
    quantity: str = ""
    match_title: str = ""
    match_url: Optional[str] = None
    match_thumbnail: Optional[str] = None
    match_price: Optional[str] = None

    @classmethod
    def from_match(cls, name: str, quantity: str, match: CatalogMatch) -> "NotableIngredient":
        return cls(
            name=name,
            quantity=quantity,
            match_title=match.title,
            match_url=match.link,
            match_thumbnail=match.thumbnail,
            match_price=match.price,
        )

    def to_simple(self) -> SimpleIngredient:
        return SimpleIngredient(name=self.name, quantity=self.quantity)


class PlainTextInstructions(BaseModel):
    kind: Literal["text"] = "text"
    text: str


class StepListInstructions(BaseModel):
    kind: Literal["steps"] = "steps"
    steps: List[str]


Instructions = Annotated[
    Union[PlainTextInstructions, StepListInstructions], Field(discriminator="kind")
]


class RecipeData(BaseModel):
    title: Optional[str] = None
    image: Optional[str] = None
    ingredient_lines: List[str] = []
    instructions: str = ""


class ClassificationResult(BaseModel):
    staples: List[StapleEntry] = []
    notable: List[ParsedIngredient] = []


class SimplifierRequest(BaseModel):
    ingredients: List[SimpleIngredient]
    staples: List[str] = []
    instructions: str = ""


class SimplifierResponse(BaseModel):
    """JSON object the language model is asked to return."""

    model_config = ConfigDict(populate_by_name=True)

    ingredients: List[SimpleIngredient]
    discarded_ingredients: List[SimpleIngredient] = Field(
        default_factory=list, alias="discardedIngredients"
    )
    instructions: Union[str, List[str]] = ""


class SimplificationResult(BaseModel):
    chosen_ingredients: List[NotableIngredient]
    discarded_ingredients: List[NotableIngredient] = []
    instructions: Instructions
    simplified: bool = False


class ConversionRequest(BaseModel):
    url: str


class ClassifyRequest(BaseModel):
    lines: List[str]


class ConversionResult(BaseModel):
    title: Optional[str] = None
    image: Optional[str] = None
    ingredients: List[NotableIngredient] = []
    staples: List[StapleEntry] = []
    additional_ingredients: List[NotableIngredient] = []
    instructions: Instructions
    simplified: bool = False
