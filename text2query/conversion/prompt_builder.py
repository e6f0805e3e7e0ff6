from langchain_core.prompts import PromptTemplate

from text2query.core.constants import Dialect
from text2query.core.prompts import CONVERT_PROMPT, SYSTEM_PROMPT

_SYSTEM_TEMPLATE = PromptTemplate.from_template(SYSTEM_PROMPT)
_CONVERT_TEMPLATE = PromptTemplate.from_template(CONVERT_PROMPT)


def build_prompt(text: str, dialect: Dialect) -> str:
    """Render the model instruction for converting ``text`` to ``dialect``.

    The user's text is embedded verbatim; no escaping is applied.
    """
    system = _SYSTEM_TEMPLATE.format(label=dialect.label)
    task = _CONVERT_TEMPLATE.format(
        syntax_name=dialect.syntax_name,
        text=text,
        label=dialect.label,
    )
    return f"{system}\n\n{task}"
