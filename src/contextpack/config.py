# src/contextpack/config.py
from dataclasses import dataclass, field, replace
from typing import Callable, Iterable, Tuple, Union

from contextpack.core.git import GitClient, RealGitClient

DEFAULT_FORMAT = "<{path}>\n```\n{content}\n```\n</{path}>\n\n"

CONTEXT_OPEN = "<context>\n"
CONTEXT_CLOSE = "</context>"

# Binary detection
BINARY_SAMPLE_SIZE = 512
BINARY_NON_PRINTABLE_THRESHOLD = 0.3

StrList = Union[str, Iterable[str]]


def _split(values: StrList) -> list:
    if isinstance(values, str):
        values = values.split(",")
    return [v.strip() for v in values if v and v.strip()]


def normalize_extensions(exts: StrList) -> Tuple[str, ...]:
    """Turns 'GO, .md' or ['go', '.MD'] into ('.go', '.md')."""
    result = []
    for ext in _split(exts):
        ext = ext.lower()
        if not ext.startswith("."):
            ext = "." + ext
        if ext not in result:
            result.append(ext)
    return tuple(result)


def normalize_names(names: StrList) -> Tuple[str, ...]:
    result = []
    for name in _split(names):
        if name not in result:
            result.append(name)
    return tuple(result)


@dataclass(frozen=True)
class Config:
    """
    Immutable run configuration.
    Build it with new_config() and the with_* options rather than mutating fields.
    """
    format: str = DEFAULT_FORMAT
    include_exts: Tuple[str, ...] = ()
    exclude_exts: Tuple[str, ...] = ()
    exclude_names: Tuple[str, ...] = ()
    ignore_gitignore: bool = False
    verbose: bool = False
    git_client: GitClient = field(default_factory=RealGitClient, compare=False, repr=False)

    def __post_init__(self):
        # Frozen: normalize through object.__setattr__
        object.__setattr__(self, "include_exts", normalize_extensions(self.include_exts))
        object.__setattr__(self, "exclude_exts", normalize_extensions(self.exclude_exts))
        object.__setattr__(self, "exclude_names", normalize_names(self.exclude_names))


Option = Callable[[Config], Config]


def new_config(*options: Option) -> Config:
    """Creates a fully validated Config by applying options in order."""
    config = Config()
    for option in options:
        config = option(config)
    return config


def with_verbose(verbose: bool = True) -> Option:
    return lambda c: replace(c, verbose=verbose)


def with_format(template: str) -> Option:
    """Output template; {path} and {content} are substituted per file."""
    return lambda c: replace(c, format=template)


def with_include(exts: StrList) -> Option:
    """Only files with these extensions are processed. Dots are optional."""
    return lambda c: replace(c, include_exts=normalize_extensions(exts))


def with_exclude(exts: StrList) -> Option:
    return lambda c: replace(c, exclude_exts=normalize_extensions(exts))


def with_exclude_names(names: StrList) -> Option:
    """Exact base names (e.g. 'package-lock.json') that are never processed."""
    return lambda c: replace(c, exclude_names=normalize_names(names))


def with_ignore_gitignore(ignore: bool = True) -> Option:
    return lambda c: replace(c, ignore_gitignore=ignore)


def with_git_client(client: GitClient) -> Option:
    return lambda c: replace(c, git_client=client)
