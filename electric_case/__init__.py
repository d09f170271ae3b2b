"""
electric-case: convert hyphenated identifiers to camelCase or snake_case as you type.

The engine watches a host editing surface, and whenever a token is completed
it rewrites the last few hyphen-delimited tokens before the cursor into the
case style chosen by a pluggable classifier.

Library Usage:
    from electric_case import CaseStyle, ConstantClassifier, Session, TextBuffer

    buffer = TextBuffer()
    session = Session(buffer, classifier=ConstantClassifier(CaseStyle.CAMEL))
    session.enable()
    buffer.type("int foo-bar = 0;")
    buffer.text  # "int fooBar = 0;"

CLI Usage:
    electric-case notes.txt --style snake
"""

from .classifier import (
    Classifier,
    ConstantClassifier,
    DeclarationClassifier,
    FunctionClassifier,
    ProfileRegistry,
    profiles,
)
from .config import CaseConfig, ConfigError, ConfigScope, build_config, load_config
from .converter import convert
from .driver import ConversionDriver
from .exceptions import (
    ClassificationError,
    ElectricCaseError,
    ReentrancyError,
    ScanBoundaryError,
    ScopedSubstitutionError,
    UnknownProfileError,
)
from .host import Host, TextBuffer
from .models import CaseStyle, Conversion, DriverState, EditEvent, EditKind, Token
from .mutator import Mutator
from .preview import PendingMarks, PreviewMarkerManager
from .scanner import scan_backward, scan_forward
from .session import Session

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "convert",
    "scan_backward",
    "scan_forward",
    "ConversionDriver",
    "Mutator",
    "PreviewMarkerManager",
    "PendingMarks",
    "Session",
    # Classification
    "Classifier",
    "ConstantClassifier",
    "DeclarationClassifier",
    "FunctionClassifier",
    "ProfileRegistry",
    "profiles",
    # Hosts
    "Host",
    "TextBuffer",
    # Data models
    "CaseStyle",
    "Conversion",
    "DriverState",
    "EditEvent",
    "EditKind",
    "Token",
    # Configuration
    "CaseConfig",
    "ConfigScope",
    "build_config",
    "load_config",
    # Exceptions
    "ClassificationError",
    "ConfigError",
    "ElectricCaseError",
    "ReentrancyError",
    "ScanBoundaryError",
    "ScopedSubstitutionError",
    "UnknownProfileError",
    # Version
    "__version__",
]
