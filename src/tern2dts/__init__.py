"""
tern2dts - Generate TypeScript declaration files from Tern definition documents.
"""

__version__ = "0.1.0"

from tern2dts.config import GeneratorConfig, load_config
from tern2dts.description import DescriptionRenderer
from tern2dts.emitter import DeclarationEmitter
from tern2dts.model import SymbolModelBuilder, build_symbols
from tern2dts.pipeline import DeclarationPipeline, generate
from tern2dts.signature import SignatureTranslator, translate

__all__ = [
    "DeclarationEmitter",
    "DeclarationPipeline",
    "DescriptionRenderer",
    "GeneratorConfig",
    "SignatureTranslator",
    "SymbolModelBuilder",
    "build_symbols",
    "generate",
    "load_config",
    "translate",
]
