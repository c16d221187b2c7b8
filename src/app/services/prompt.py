"""
Prompt Templating: LetterRequest → 자연어 프롬프트.

구성 순서 (변경 시 PROMPT_TEMPLATE_VERSION 업데이트):
1. 아이 소개 (이름, 나이/성별)
2. 오늘 날짜
3. 편지 형식 지시 (인사, 칭찬 문단, 목록/선물 문단, 맺음말, 서명, P.S.)
4. Letter Details (목록 상태, 좋은 일, 개선할 점, 선물, 특별 메시지)
5. 톤 지시 (목록 상태별)
6. 분량 리마인더

빈 선택 필드는 줄 자체를 생략.
"""

from datetime import date

from src.domain.schemas import Gender, LetterRequest

PROMPT_TEMPLATE_VERSION = "1.0.0"

SYSTEM_PROMPT = (
    "You are Santa Claus writing SHORT, SWEET letters from the North Pole! "
    "Keep it BRIEF - just 3-4 short paragraphs max. Be enthusiastic and magical "
    "but GET TO THE POINT quickly. Write like you're talking to a kid - friendly, "
    "warm, and playful. Use age-appropriate vocabulary. Sprinkle in Christmas magic "
    "but keep it concise. Include specific details about them to make it personal. "
    "Remember: SHORT and SWEET is the goal - make every word count!\n\n"
    "IMPORTANT: Write in a classic, old-fashioned style. DO NOT use any emojis - "
    "keep the letter traditional and timeless, just like letters from Santa used "
    "to be written."
)

LETTER_FORMAT = """IMPORTANT: Keep this SHORT and SWEET! Format the letter like this:

[Greeting with "Ho Ho Ho!" and their name]

[ONE paragraph about their year - mention 1-2 specific things they did well]

[ONE paragraph about their list status and any gifts (if applicable)]

[Quick closing with warmth and Christmas magic]

Santa Claus

[Short P.S. with one fun detail about the North Pole]

TOTAL LENGTH: 3-4 SHORT paragraphs maximum! Be concise but magical!

"""

GOOD_LIST_TONE = (
    "Tone: SUPER EXCITED and proud! Celebrate their awesome behavior! "
    "Make them feel special! Keep it brief but genuine."
)
NAUGHTY_LIST_TONE = (
    "Tone: Still super friendly and believe in them 100%! Be encouraging and "
    "hopeful about next year. Keep it brief but caring."
)
BREVITY_REMINDER = (
    "KEEP IT SHORT! 3-4 brief paragraphs max. Match the energy to the kid's age. "
    "Include 1-2 specific details about them. Add ONE fun North Pole detail. "
    "NO rambling - every sentence should count. Make it magical but CONCISE!"
)


def format_letter_date(day: date) -> str:
    """'December 3, 2026' 형식 (플랫폼 무관)."""
    return f"{day:%B} {day.day}, {day.year}"


def describe_child(request: LetterRequest) -> str:
    """이름 뒤에 붙는 나이/성별 구절."""
    gender = request.gender.value if request.gender is not Gender.UNSET else ""
    if gender and request.age:
        return f", a {request.age}-year-old {gender}"
    if gender:
        return f", a wonderful {gender}"
    if request.age:
        return f", who is {request.age} years old"
    return ""


def build_letter_details(request: LetterRequest) -> list[str]:
    """'Letter Details' 목록 줄."""
    status = "GOOD LIST" if request.is_on_good_list else "NAUGHTY LIST"
    lines = [f"- List Status: {status}"]

    if request.good_things:
        lines.append(f"- Good things this year: {request.good_things}")
    if request.bad_things:
        lines.append(f"- Areas for improvement: {request.bad_things}")
    if request.requested_gifts:
        lines.append(f"- Requested gifts: {request.requested_gifts}")
    if request.additional_notes:
        lines.append(f"- Special message to include: {request.additional_notes}")

    return lines


def build_prompt(request: LetterRequest, today: date | None = None) -> str:
    """
    편지 생성 프롬프트 구성.

    Args:
        request: 검증된 LetterRequest
        today: 편지 날짜 (None이면 오늘, 테스트에서 고정용)

    Returns:
        업스트림에 보낼 사용자 프롬프트
    """
    today = today or date.today()

    prompt = f"Write a personalized letter from Santa Claus to {request.child_name}"
    prompt += describe_child(request)
    prompt += f". The current date is {format_letter_date(today)}.\n\n"

    prompt += LETTER_FORMAT

    prompt += "Letter Details:\n"
    prompt += "".join(f"{line}\n" for line in build_letter_details(request))

    tone = GOOD_LIST_TONE if request.is_on_good_list else NAUGHTY_LIST_TONE
    prompt += f"\n{tone}"
    prompt += f"\n\n{BREVITY_REMINDER}"

    return prompt
