"""
Conversion state and pipeline composition

The CLI runs a conversion as a chain of stages. Each stage takes a
ProgramState, copies it, fills in what it produced and hands the copy on;
pipeline() threads a state through a list of such stages.
"""

from pathlib import Path
from argparse import Namespace
from functools import reduce
from dataclasses import dataclass, field, fields
from typing import Callable, List, Optional, Type, TypeVar, TYPE_CHECKING

# Imported for annotations only; the compiler models import nothing from here
if TYPE_CHECKING:
    from .outline import OutlineNode
    from .compiler import CompileResult


PS = TypeVar("PS", bound="ProgramState")
Stage = Callable[["ProgramState"], "ProgramState"]


@dataclass
class ProgramState:
    """
    Everything one conversion knows, from CLI options to written files

    Fields filled in by each stage:
        - main (from the CLI): inputdir, outputdir, verbosity, inputFile,
          style, headerLevels, sheet, outputFile
        - env_check: inputSourceFile, envOK
        - outline_read: outline
        - outline_compile: compileResult
        - outputs_save: outputFiles
        - results_report: nothing

    Attributes:
        inputdir: Directory holding the .xmind file
        outputdir: Directory receiving the document and the deck
        verbosity: LOG() threshold (0 silent, 1 progress, 2 details, 3 traces)
        inputFile: .xmind file name, relative to inputdir
        style: Output dialect name or alias (md, doku)
        headerLevels: Outline levels rendered as headings
        sheet: Index of the sheet to convert
        outputFile: Document file name override, relative to outputdir
        envOK: Set by env_check once paths and options are valid
        inputSourceFile: Full path of the .xmind file
        outline: Root topic of the selected sheet
        compileResult: Document, deck and counts
        outputFiles: Files actually written
    """

    # From the command line
    inputdir: Optional[Path] = field(default=None)
    outputdir: Optional[Path] = field(default=None)
    verbosity: int = field(default=1)
    inputFile: str = field(default="")
    style: Optional[str] = field(default=None)
    headerLevels: Optional[int] = field(default=None)
    sheet: int = field(default=0)
    outputFile: Optional[str] = field(default=None)

    # Filled in by the stages
    envOK: bool = field(default=False)
    inputSourceFile: Path = field(default=Path("/"))
    outline: Optional["OutlineNode"] = field(default=None)
    compileResult: Optional["CompileResult"] = field(default=None)
    outputFiles: List[Path] = field(default_factory=list)

    @classmethod
    def state_createFromNamespace(
        cls: Type[PS], options: Namespace, inputdir: Path, outputdir: Path
    ) -> PS:
        """
        Build the initial state from parsed CLI options

        Options without a matching field (e.g. those added by the plugin
        wrapper) are dropped.

        Args:
            options: Parsed arguments
            inputdir: Input directory given to the plugin
            outputdir: Output directory given to the plugin
        """
        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in vars(options).items() if k in known}
        values.update(inputdir=inputdir, outputdir=outputdir)
        return cls(**values)

    def copy(self: PS) -> PS:
        """Shallow copy, so a stage never mutates the state it was given"""
        return type(self)(**self.__dict__)


def pipeline(initial_state: ProgramState, *stages: Stage) -> ProgramState:
    """
    Run stages left to right, each on the state returned by the previous one

    Example:
        pipeline(state, env_check, outline_read, outline_compile)

    is the same as:
        outline_compile(outline_read(env_check(state)))
    """
    return reduce(lambda state, stage: stage(state), stages, initial_state)
