"""
Data schemas for the letter service.

규칙:
- 와이어 형식은 camelCase (브라우저 폼과 동일)
- LetterRequest는 제출 시점의 불변 스냅샷
- LetterResponse는 letter가 비어 있지 않을 때만 유효
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .errors import LetterError, ValidationError

# =============================================================================
# Enums
# =============================================================================


class Gender(str, Enum):
    """아이 성별. 미선택은 빈 문자열로 직렬화."""

    BOY = "boy"
    GIRL = "girl"
    UNSET = ""


class HealthStatus(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


# =============================================================================
# Letter Request
# =============================================================================


def _text(payload: dict[str, Any], key: str) -> str:
    """선택 텍스트 필드. None/누락은 빈 문자열."""
    value = payload.get(key)
    if value is None:
        return ""
    if not isinstance(value, (str, int, float)) or isinstance(value, bool):
        raise ValidationError(f"'{key}' must be a string", field=key)
    return str(value).strip()


@dataclass(frozen=True)
class LetterRequest:
    """
    편지 생성 요청.

    필드명은 브라우저 폼과 동일 (to_dict/from_dict에서 camelCase 변환):
    - child_name (필수)
    - age, gender, good_things, bad_things, is_on_good_list,
      additional_notes, gifts (선택)
    """

    child_name: str = ""
    age: str = ""
    gender: Gender = Gender.UNSET
    good_things: str = ""
    bad_things: str = ""
    is_on_good_list: bool = True
    additional_notes: str = ""
    gifts: str = ""

    @classmethod
    def from_dict(cls, payload: Any) -> "LetterRequest":
        """
        와이어 형식(camelCase dict)에서 생성.

        Raises:
            ValidationError: 이름 누락, 나이/성별 형식 오류, dict가 아닌 바디
        """
        if not isinstance(payload, dict):
            raise ValidationError("Invalid request body")

        child_name = payload.get("childName")
        if not isinstance(child_name, str) or not child_name.strip():
            raise ValidationError("Child's name is required", field="childName")

        age = _text(payload, "age")
        if age and not (age.isascii() and age.isdigit()):
            raise ValidationError("Age must be a whole number", field="age")

        raw_gender = payload.get("gender") or ""
        try:
            gender = Gender(raw_gender)
        except ValueError:
            raise ValidationError(
                "Gender must be 'boy', 'girl' or empty", field="gender"
            ) from None

        is_on_good_list = payload.get("isOnGoodList", True)
        if not isinstance(is_on_good_list, bool):
            raise ValidationError("'isOnGoodList' must be a boolean", field="isOnGoodList")

        return cls(
            child_name=child_name.strip(),
            age=age,
            gender=gender,
            good_things=_text(payload, "goodThings"),
            bad_things=_text(payload, "badThings"),
            is_on_good_list=is_on_good_list,
            additional_notes=_text(payload, "additionalNotes"),
            gifts=_text(payload, "gifts"),
        )

    @property
    def requested_gifts(self) -> str:
        """선물 요청은 착한 아이 목록일 때만 의미가 있음."""
        return self.gifts if self.is_on_good_list else ""

    def to_dict(self) -> dict[str, Any]:
        """JSON 직렬화용 (camelCase)."""
        return {
            "childName": self.child_name,
            "age": self.age,
            "gender": self.gender.value,
            "goodThings": self.good_things,
            "badThings": self.bad_things,
            "isOnGoodList": self.is_on_good_list,
            "additionalNotes": self.additional_notes,
            "gifts": self.gifts,
        }


# =============================================================================
# Letter Response
# =============================================================================


@dataclass(frozen=True)
class LetterResponse:
    """생성된 편지 + 원본 요청. 세션 저장소에 그대로 미러링됨."""

    letter: str
    form_data: LetterRequest = field(default_factory=LetterRequest)

    @property
    def is_valid(self) -> bool:
        return bool(self.letter.strip())

    def to_dict(self) -> dict[str, Any]:
        return {
            "letter": self.letter,
            "formData": self.form_data.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Any) -> "LetterResponse":
        """
        세션 저장소 JSON에서 복원.

        Raises:
            ValidationError: 구조가 맞지 않거나 formData가 유효하지 않을 때
        """
        if not isinstance(data, dict) or not isinstance(data.get("letter"), str):
            raise ValidationError("Stored letter is malformed")
        return cls(
            letter=data["letter"],
            form_data=LetterRequest.from_dict(data.get("formData")),
        )


# =============================================================================
# API Health
# =============================================================================


@dataclass
class ApiHealth:
    """헬스 체크 결과. 매 요청마다 재계산, 저장하지 않음."""

    status: HealthStatus
    message: str
    details: str | None = None
    model: str | None = None
    timestamp: str | None = None

    @classmethod
    def from_error(cls, error: LetterError) -> "ApiHealth":
        return cls(
            status=HealthStatus.ERROR,
            message=error.health_message or error.error,
            details=error.health_details or error.details,
        )

    def to_dict(self) -> dict[str, Any]:
        result = {
            "status": self.status.value,
            "message": self.message,
            "details": self.details,
            "model": self.model,
            "timestamp": self.timestamp,
        }
        # None 값 제거
        return {k: v for k, v in result.items() if v is not None}
