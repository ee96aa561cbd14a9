#!/usr/bin/env python3
"""
mapdown - XMind outline exporter

Converts an XMind mind map into a DokuWiki or Markdown document and, when the
map holds slide groups (topics titled "rjs"), into a DokuWiki reveal.js deck.

As in other ChRIS plugins, the app runs as a chain of pipeline stages over
a ProgramState.

Outline conventions:
    - Upper levels become headings (--headerLevels), deeper levels lists
    - "rjs" topics open a slide; their subtree is the slide content
    - [(P12345678)] cites a PubMed id; a bibliography is generated
    - "options" topics switch list rendering (no-list, only-bold, only-tagged)
    - [skip] anywhere in a title drops the topic and its subtree

Usage:
    mapdown inputdir/ outputdir/ --inputFile talk.xmind

Examples:
    # Markdown document with two heading levels
    mapdown . output/ --inputFile talk.xmind

    # DokuWiki document, three heading levels, second sheet
    mapdown . output/ --inputFile talk.xmind --style doku --headerLevels 3 --sheet 1

    # Verbose output
    mapdown . output/ --inputFile talk.xmind -vv
"""

import sys
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter

from chris_plugin import chris_plugin
from .config import appsettings
from .lib import Compiler, OutlineReader, ReaderError, StyleError, __version__, LOG, state_connectToLogger
from .lib.output import outputPaths_derive, outputs_write
from .models import ProgramState, pipeline


DISPLAY_TITLE = r"""
                           _
  _ __ ___   __ _ _ __   __| | _____      ___ __
 | '_ ` _ \ / _` | '_ \ / _` |/ _ \ \ /\ / / '_ \
 | | | | | | (_| | |_) | (_| | (_) \ V  V /| | | |
 |_| |_| |_|\__,_| .__/ \__,_|\___/ \_/\_/ |_| |_|
                 |_|
  XMind outline exporter
"""

# Define CLI arguments
parser = ArgumentParser(
    description="mapdown - export XMind outlines to DokuWiki/Markdown documents and reveal.js decks",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "--inputFile", required=True, type=str, help="Input XMind (.xmind) file (relative to inputdir)"
)

parser.add_argument(
    "--style",
    default=appsettings.default_style,
    type=str,
    help="Output dialect: md (Markdown) or doku (DokuWiki)",
)

parser.add_argument(
    "--headerLevels",
    default=appsettings.header_levels,
    type=int,
    help="Number of outline levels rendered as headings (0: everything is a list)",
)

parser.add_argument(
    "--sheet",
    default=0,
    type=int,
    help="Index of the mind map sheet to export",
)

parser.add_argument(
    "--outputFile",
    default=None,
    type=str,
    help="Document file name within outputdir. Defaults to the input name with the style's extension",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv, -vvv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate environment and resolve the input path.

    Args:
        inputstate: Initial program state with CLI options

    Returns:
        ProgramState with added fields:
            - inputSourceFile: Resolved path to the .xmind input file
            - envOK: True if environment is valid

    Exits:
        1 if the input file is not found or the header levels are negative
    """

    state = inputstate.copy()

    if state.verbosity >= 2:
        LOG(DISPLAY_TITLE, level=2)

    LOG("Checking environment...", level=2)

    input_file = state.inputdir / state.inputFile

    if not input_file.exists():
        print(f"Error: Input file not found: {input_file}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    if state.headerLevels is not None and state.headerLevels < 0:
        print(f"Error: --headerLevels must be >= 0, got {state.headerLevels}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    state.inputSourceFile = input_file
    LOG(f"Input file: {input_file}", level=2)

    state.outputdir.mkdir(parents=True, exist_ok=True)
    LOG(f"Output directory: {state.outputdir}", level=2)

    state.envOK = True
    return state


def outline_read(inputstate: ProgramState) -> ProgramState:
    """
    Read the XMind archive and decode the selected sheet.

    Args:
        inputstate: Program state with inputSourceFile path set

    Returns:
        ProgramState with added field:
            - outline: OutlineNode root of the selected sheet

    Exits:
        1 if the file cannot be opened or decoded
    """

    state = inputstate.copy()

    LOG(f"Reading file: {state.inputSourceFile}", level=1)
    try:
        reader = OutlineReader(state.inputSourceFile, sheet=state.sheet)
        state.outline = reader.outline_read()
    except ReaderError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    LOG(f"Root topic: {state.outline.title!r}", level=2)
    return state


def outline_compile(inputstate: ProgramState) -> ProgramState:
    """
    Convert the outline into a document and a slide deck.

    Args:
        inputstate: Program state with outline

    Returns:
        ProgramState with added field:
            - compileResult: CompileResult (document, deck, suffixes, counts)

    Exits:
        1 if outline is None or the style cannot be loaded
    """

    state = inputstate.copy()

    LOG("Converting outline...", level=1)

    if state.outline is None:
        print("Error: No outline available", file=sys.stderr)
        sys.exit(1)

    try:
        compiler = Compiler(
            outline=state.outline,
            style=state.style,
            header_levels=state.headerLevels,
        )
        state.compileResult = compiler.compile()
    except StyleError as e:
        print(f"Style error: {e}", file=sys.stderr)
        sys.exit(1)

    return state


def outputs_save(inputstate: ProgramState) -> ProgramState:
    """
    Write the document and the deck to the output directory.

    Args:
        inputstate: Program state with compileResult

    Returns:
        ProgramState with added field:
            - outputFiles: Paths of the written files

    Exits:
        1 if compileResult is None or a file cannot be written
    """

    state = inputstate.copy()

    if not state.compileResult:
        print("Error: Conversion failed", file=sys.stderr)
        sys.exit(1)

    document_path, deck_path = outputPaths_derive(
        state.inputSourceFile, state.outputdir, state.compileResult, state.outputFile
    )
    try:
        state.outputFiles = outputs_write(state.compileResult, document_path, deck_path)
    except OSError as e:
        print(f"Error writing output: {e}", file=sys.stderr)
        sys.exit(1)
    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Display conversion results.

    Args:
        inputstate: Program state with compileResult and outputFiles

    Returns:
        ProgramState unchanged (terminal pipeline stage)
    """
    state: ProgramState = inputstate.copy()

    if state.verbosity >= 1:
        LOG("\n✓ Export successful!", level=1)
        for output_file in state.outputFiles:
            LOG(f"  Output: {output_file}", level=1)
        LOG(f"  Slides: {state.compileResult.slide_count}", level=1)
        LOG(f"  PubMed references: {len(state.compileResult.pmids)}", level=1)
    return state


@chris_plugin(
    parser=parser,
    title="mapdown - XMind outline exporter",
    category="Utility",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - export an XMind outline.

    Orchestrates the full conversion pipeline:
        1. env_check: Validate paths and options
        2. outline_read: Decode the .xmind file into an outline tree
        3. outline_compile: Render document and deck
        4. outputs_save: Write the outputs
        5. results_report: Display results to user

    Args:
        options: CLI arguments from argparse
        inputdir: Directory containing the .xmind file
        outputdir: Directory where the outputs will be written

    Note:
        This function is wrapped by @chris_plugin which handles CLI
        argument parsing and invokes this function with parsed values.
    """

    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )

    # Connect state to logger for entire pipeline
    state_connectToLogger(state)

    pipeline(state, env_check, outline_read, outline_compile, outputs_save, results_report)


if __name__ == "__main__":
    main()  # type: ignore  # @chris_plugin decorator transforms signature
