# app/services/prompt_library.py
import re
from langchain_core.prompts import PromptTemplate

from app.models.enums import InteractionType

HTML_TAG_PATTERN = re.compile(r"<[^>]*>")
DEFAULT_RATING = 1200

PROMPT_LIBRARY = {
    InteractionType.CODE_REVIEW: PromptTemplate.from_template(
        """
As a coding mentor, review this {language} code for the problem "{title}":

Problem Description: {description}

Code:
```{language}
{code}
```

Please provide:
1. Code quality assessment (readability, structure, best practices)
2. Time and space complexity analysis
3. Potential bugs or edge cases missed
4. Suggestions for improvement
5. Alternative approaches if applicable

Keep the response concise but comprehensive.
"""
    ),
    InteractionType.ROADMAP: PromptTemplate.from_template(
        """
Create a personalized coding learning roadmap for a {current_level} level programmer.

User Profile:
- Current Level: {current_level}
- Goals: {goals}
- Time Commitment: {time_commitment} hours per week
- Preferred Topics: {preferred_topics}
- Problems Solved: {total_solved}
- Current Rating: {rating}

Please provide:
1. A structured learning path with milestones
2. Recommended topics and concepts to study
3. Practice problem categories and difficulty progression
4. Estimated timeline for each phase
5. Resources and tips for effective learning

Format as a detailed roadmap with clear phases and actionable steps.
"""
    ),
    InteractionType.HINT: PromptTemplate.from_template(
        """
Provide a helpful hint for solving this coding problem. Don't give away the complete solution, but guide the user in the right direction.

Problem: {title}
Description: {description}
Difficulty: {difficulty}

{attempt_section}

Provide:
1. A conceptual hint about the approach
2. Key insights or patterns to recognize
3. Suggested next steps
4. Common pitfalls to avoid

Keep it encouraging and educational without spoiling the solution.
"""
    ),
    InteractionType.DEBUG_HELP: PromptTemplate.from_template(
        """
Help debug this {language} code that's encountering an error.

{problem_section}

Code:
```{language}
{code}
```

Error: {error}

Please provide:
1. Explanation of what's causing the error
2. Step-by-step debugging approach
3. Specific fixes needed
4. Prevention tips for similar issues

Be clear and educational in your explanation.
"""
    ),
}


def strip_html(text: str | None) -> str:
    """Removes markup tags from rich text, keeping the text content."""
    if not text:
        return ""
    return HTML_TAG_PATTERN.sub("", str(text))

def _text(value) -> str:
    return "" if value is None else str(value)

def _join(values) -> str:
    if not values:
        return ""
    if isinstance(values, str):
        return values
    return ", ".join(str(v) for v in values)

def _fenced(code, language) -> str:
    return f"```{_text(language)}\n{_text(code)}\n```"


def build_code_review_prompt(problem, code: str | None, language: str | None) -> str:
    return PROMPT_LIBRARY[InteractionType.CODE_REVIEW].format(
        language=_text(language),
        title=_text(problem.title),
        description=strip_html(problem.description),
        code=_text(code),
    )

def build_roadmap_prompt(user, goals, current_level, time_commitment, preferred_topics) -> str:
    """The user's stats are read as context signals only."""
    total_solved = getattr(user, "total_solved", None)
    rating = getattr(user, "rating", None)
    return PROMPT_LIBRARY[InteractionType.ROADMAP].format(
        current_level=_text(current_level),
        goals=_join(goals),
        time_commitment=_text(time_commitment),
        preferred_topics=_join(preferred_topics),
        total_solved=total_solved if total_solved is not None else 0,
        rating=rating if rating is not None else DEFAULT_RATING,
    )

def build_hint_prompt(problem, current_code: str | None = None, language: str | None = None) -> str:
    attempt_section = f"Current attempt:\n{_fenced(current_code, language)}" if current_code else ""
    return PROMPT_LIBRARY[InteractionType.HINT].format(
        title=_text(problem.title),
        description=strip_html(problem.description),
        difficulty=_text(problem.difficulty),
        attempt_section=attempt_section,
    )

def build_debug_prompt(code: str | None, language: str | None, error: str | None, problem=None) -> str:
    problem_section = ""
    if problem is not None:
        problem_section = f"Problem: {_text(problem.title)}\nDescription: {strip_html(problem.description)}"
    return PROMPT_LIBRARY[InteractionType.DEBUG_HELP].format(
        language=_text(language),
        problem_section=problem_section,
        code=_text(code),
        error=_text(error),
    )
