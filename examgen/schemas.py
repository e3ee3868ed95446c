from typing import Annotated, List, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field

class GenerateIn(BaseModel):
    model_config = ConfigDict(extra="ignore")

    content: Optional[str] = None
    mode: Optional[str] = None

class ObjectiveQuestion(BaseModel):
    id: int
    type: Literal["objective"] = "objective"
    question: str
    options: List[str] = Field(min_length=4, max_length=4)
    answer: str
    explanation: str

class SubjectiveQuestion(BaseModel):
    id: int
    type: Literal["subjective"] = "subjective"
    question: str
    answer: str

class TheoryQuestion(BaseModel):
    id: int
    type: Literal["theory"] = "theory"
    question: str
    answer: str
    keywords: List[str] = Field(default_factory=list, max_length=10)

QuestionRecord = Annotated[
    Union[ObjectiveQuestion, SubjectiveQuestion, TheoryQuestion],
    Field(discriminator="type"),
]

class QuestionSet(BaseModel):
    questions: List[QuestionRecord]
    total: int

class ErrorOut(BaseModel):
    error: str
