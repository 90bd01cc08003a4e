"""
Declaration Pipeline - One full pass from a Tern document to declaration text.

Nothing is written here: the caller persists the result once the whole pass
succeeded, so a failed run never leaves a partial declaration file behind.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from tern2dts.config import GeneratorConfig
from tern2dts.emitter import (
    Declaration,
    DeclarationEmitter,
    assemble_document,
    build_lint_config,
    resolve_globals,
)
from tern2dts.errors import FetchError
from tern2dts.model import Symbol, SymbolModelBuilder
from tern2dts.utils.fetch import fetch_json, is_url
from tern2dts.utils.file_handlers import load_json
from tern2dts.utils.logging import get_logger

logger = get_logger("pipeline")


@dataclass
class PipelineResult:
    """Everything one pass produced."""
    document: str
    symbols: Dict[str, Symbol] = field(default_factory=dict)
    declarations: List[Declaration] = field(default_factory=list)
    globals: List[Declaration] = field(default_factory=list)
    lint_config: Dict[str, Any] = field(default_factory=dict)

    @property
    def declared_names(self) -> List[str]:
        return [d.name for d in self.declarations + self.globals]


class DeclarationPipeline:
    """
    Build symbols, emit declarations, resolve globals and assemble the output.
    """

    def __init__(self, config: Optional[GeneratorConfig] = None) -> None:
        self.config = config or GeneratorConfig()
        self.builder = SymbolModelBuilder(self.config)
        self.emitter = DeclarationEmitter(self.config)

    def load(self, source: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
        """
        Load the Tern document from a URL, a path relative to the base URL, or a file.

        Args:
            source: URL or local path; defaults to the configured source
                resolved against the base URL

        Returns:
            The raw document
        """
        source = str(source or self.config.source)
        logger.info("Loading Tern document from %s", source)
        if is_url(source) or not Path(source).exists():
            document = fetch_json(source, self.config.base_url, self.config.timeout)
        else:
            document = load_json(source)
        if not isinstance(document, dict):
            raise FetchError(f"{source} does not hold a JSON object")
        return document

    def run(self, document: Dict[str, Any]) -> PipelineResult:
        """
        Run the full pass over a loaded document.

        Args:
            document: Raw Tern document, including its ``!define`` overlay

        Returns:
            The assembled document and the intermediate results
        """
        symbols = self.builder.build(document)
        logger.info("Built %d symbols", len(symbols))

        declarations = self.emitter.emit_all(symbols.values())
        globals_ = resolve_globals(declarations, self.config.globals)
        logger.info(
            "Emitted %d declarations and %d globals", len(declarations), len(globals_)
        )

        text = assemble_document(
            self.config.header,
            [d.text for d in declarations + globals_],
        )
        result = PipelineResult(
            document=text,
            symbols=symbols,
            declarations=declarations,
            globals=globals_,
        )
        result.lint_config = build_lint_config(
            result.declared_names, self.config.reserved_identifiers
        )
        return result


def generate(
    document: Dict[str, Any],
    config: Optional[GeneratorConfig] = None,
) -> str:
    """Run the pipeline and return the declaration document text."""
    return DeclarationPipeline(config).run(document).document
