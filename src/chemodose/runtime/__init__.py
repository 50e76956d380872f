"""
Runtime components for formula-driven dose calculation.

1. Bindings (Input Layer) - bindings: user input to field id -> number
2. Compiled Drug (Cache) - compiled: formulas parsed once per text
3. Formula Batch Runner (Business Logic) - batch_runner
4. Result Formatter (Presentation) - result_formatter
5. Backup I/O (Import/Export) - backup

Callers depend on IFormulaRunner; the engine behind it can change without
touching the API or CLI.
"""

from chemodose.runtime.batch_runner import (
    FormulaBatchRunner,
    IFormulaRunner,
    has_required_inputs,
    run_batch,
)
from chemodose.runtime.backup import BackupLoadError, export_drugs, load_backup, loads_backup
from chemodose.runtime.bindings import (
    apply_input,
    build_bindings,
    coerce_input,
    initial_bindings,
    parse_assignments,
)
from chemodose.runtime.compiled import CompiledDrug, compile_formula

__all__ = [
    "BackupLoadError",
    "CompiledDrug",
    "FormulaBatchRunner",
    "IFormulaRunner",
    "apply_input",
    "build_bindings",
    "coerce_input",
    "compile_formula",
    "export_drugs",
    "has_required_inputs",
    "initial_bindings",
    "load_backup",
    "loads_backup",
    "parse_assignments",
    "run_batch",
]
