"""
Argument and option resolution for proxy-deployments commands.

Commands declare their positional arguments and options as mappings of
name to the value the user supplied (None when missing). Missing values are
collected interactively, in one round per namespace, from questions
described by QuestionSpec objects.
"""

from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Union

import questionary
import structlog

from .exceptions import InteractiveInputError
from .manifest import PackageManifest
from .types import AnswerSet, DynamicChoices, QuestionSpec, StaticChoices

log = structlog.get_logger()

# Takes question dicts, returns {question name: answer}
Prompter = Callable[[List[Dict[str, Any]]], Dict[str, Any]]


def ask_questions(questions: List[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Ask questions in order with questionary.

    Callable choices are computed from the answers collected so far, so a
    question may list options that depend on an earlier one.

    Raises:
        KeyboardInterrupt: If the user aborts a question
    """
    answers: Dict[str, Any] = {}
    for question in questions:
        question = dict(question)
        if callable(question.get("choices")):
            question["choices"] = question["choices"](dict(answers))
        answers.update(questionary.unsafe_prompt([question]))
    return answers


def prompt_if_needed(
    args: Optional[Mapping[str, Any]] = None,
    opts: Optional[Mapping[str, Any]] = None,
    props: Optional[Mapping[str, QuestionSpec]] = None,
    defaults: Optional[Mapping[str, Any]] = None,
    *,
    interactive: bool,
    prompter: Optional[Prompter] = None,
) -> AnswerSet:
    """
    Fill in missing arguments and options.

    Args are missing when None or empty; opts only when None. Names whose
    question offers an empty static choice list are never asked and stay
    as given. Each namespace is asked in a single prompt round.

    Args:
        args: Positional arguments of the command
        opts: Options of the command
        props: Question for each name
        defaults: Default answer for each name, overriding the question's own
        interactive: Whether to ask at all; if False, missing values stay None
        prompter: Input primitive (defaults to ask_questions)

    Returns:
        Merged args and opts, each passed through its question's normalize

    Raises:
        InteractiveInputError: If a prompt round fails
    """
    args = args or {}
    opts = opts or {}
    props = props or {}
    defaults = defaults or {}

    args_questions = [
        prompt_for(name, defaults, props)
        for name, value in args.items()
        if is_empty(value) and not _has_empty_choices(props.get(name))
    ]
    opts_questions = [
        prompt_for(name, defaults, props)
        for name, value in opts.items()
        if value is None and not _has_empty_choices(props.get(name))
    ]

    return {
        **_answers_for(args, args_questions, props, interactive, prompter),
        **_answers_for(opts, opts_questions, props, interactive, prompter),
    }


def is_empty(value: Any) -> bool:
    """True for None and for zero-length strings and collections."""
    if value is None:
        return True
    if isinstance(value, (str, bytes, list, tuple, dict, set, frozenset)):
        return len(value) == 0
    return False


def _has_empty_choices(spec: Optional[QuestionSpec]) -> bool:
    return spec is not None and spec.has_empty_choices()


def prompt_for(
    name: str, defaults: Mapping[str, Any], props: Mapping[str, QuestionSpec]
) -> Dict[str, Any]:
    """
    Build the question dict for one name.

    Names without a QuestionSpec get a free-text question.
    """
    spec = props.get(name) or QuestionSpec(message=name)

    default = defaults.get(name)
    if default is None:
        default = spec.default

    question: Dict[str, Any] = {
        **spec.extra,
        "type": spec.type,
        "name": name,
        "message": spec.message,
    }
    if isinstance(spec.choices, StaticChoices):
        question["choices"] = list(spec.choices.items)
    elif isinstance(spec.choices, DynamicChoices):
        question["choices"] = spec.choices.produce
    if default is not None:
        question["default"] = default

    return question


def _answers_for(
    inputs: Mapping[str, Any],
    questions: List[Dict[str, Any]],
    props: Mapping[str, QuestionSpec],
    interactive: bool,
    prompter: Optional[Prompter],
) -> AnswerSet:
    merged = dict(inputs)
    if interactive and questions:
        merged.update(_ask(questions, prompter or ask_questions))

    normalized = {}
    for name, value in merged.items():
        spec = props.get(name)
        normalized[name] = spec.normalize(value) if spec and spec.normalize else value
    return normalized


def _ask(questions: List[Dict[str, Any]], prompter: Prompter) -> Dict[str, Any]:
    names = [q["name"] for q in questions]
    log.debug("prompt.round", questions=names)

    try:
        answers = prompter(questions)
    except (KeyboardInterrupt, EOFError, OSError) as e:
        raise InteractiveInputError(f"Interactive input failed for: {', '.join(names)}") from e

    missing = [name for name in names if name not in answers]
    if missing:
        raise InteractiveInputError(f"No answer given for: {', '.join(missing)}")
    return answers


def choice_question(
    name: str, message: str, type: str, choices: Optional[Sequence[Any]] = None
) -> Dict[str, QuestionSpec]:
    """Build {name: QuestionSpec} for a question with static choices."""
    return {name: QuestionSpec.with_choices(message, type, choices)}


def networks_list(
    type: str, project_root: Optional[Union[Path, str]] = None
) -> Dict[str, QuestionSpec]:
    """Question for picking one of the networks the project has a network file for."""
    networks = PackageManifest.load(project_root).network_names()
    return choice_question("network", "Select a network from the network list", type, networks)


def linked_dependencies_props(dependency_names: Sequence[str]) -> Dict[str, QuestionSpec]:
    """Question for picking linked dependencies to unlink."""
    return choice_question(
        "dependencies",
        "Select the dependencies you want to unlink",
        "checkbox",
        dependency_names,
    )
