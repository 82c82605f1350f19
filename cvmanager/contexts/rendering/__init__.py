"""
Rendering Context

Responsibilities:
- Runs the external LaTeX compiler in a workspace
- Decides success by the presence of the PDF, not the exit code
- Extracts diagnostics (log tail, error and warning lines)

Owns: LaTeX compilation
Never: Modifies document content, decides where artifacts are stored
"""

from cvmanager.contexts.rendering.compiler import CompilationResult, compile_latex

__all__ = ["CompilationResult", "compile_latex"]
