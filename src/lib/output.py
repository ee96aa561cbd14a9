"""
Output file naming and writing

The document is named after the input file with the style's extension
(talk.xmind -> talk.md); the deck inserts the deck infix before that
extension (talk_revealjs.md). An explicit output file name replaces the
document name and the deck name is derived from it the same way.
"""

from pathlib import Path
from typing import List, Optional, Tuple

from ..config import appsettings
from ..models.compiler import CompileResult
from .log import LOG


def outputPaths_derive(
    input_file: Path,
    outputdir: Path,
    result: CompileResult,
    output_file: Optional[str] = None,
) -> Tuple[Path, Path]:
    """
    Derive the document and deck paths

    Args:
        input_file: Path of the converted .xmind file
        outputdir: Directory receiving the outputs
        result: Conversion result (suggested suffixes)
        output_file: Optional document file name (relative to outputdir)

    Returns:
        (document_path, deck_path)

    Example:
        >>> outputPaths_derive(Path("in/talk.xmind"), Path("out"), result)
        (PosixPath('out/talk.md'), PosixPath('out/talk_revealjs.md'))
    """
    if output_file:
        document_path = outputdir / output_file
        deck_path = document_path.with_name(
            document_path.stem + appsettings.deck_infix + document_path.suffix
        )
    else:
        stem = Path(input_file).stem
        document_path = outputdir / (stem + result.document_suffix)
        deck_path = outputdir / (stem + result.deck_suffix)
    return document_path, deck_path


def outputs_write(result: CompileResult, document_path: Path, deck_path: Path) -> List[Path]:
    """
    Write the non-empty outputs

    Returns:
        Paths actually written
    """
    written = []
    if result.document:
        document_path.parent.mkdir(parents=True, exist_ok=True)
        document_path.write_text(result.document, encoding="utf-8")
        LOG(f"Wrote document: {document_path}", level=2)
        written.append(document_path)
    else:
        LOG("No dokuwiki or markdown output to write", level=1)

    if result.deck:
        deck_path.parent.mkdir(parents=True, exist_ok=True)
        deck_path.write_text(result.deck, encoding="utf-8")
        LOG(f"Wrote reveal.js deck: {deck_path}", level=2)
        written.append(deck_path)
    else:
        LOG("No reveal.js output to write", level=1)
    return written
