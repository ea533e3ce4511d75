"""
Test utilities package for i18next-keyscan tests.

## Available Modules

### tree_helpers.py
Builders for syntax tree nodes that read like the JavaScript they stand for:
- `analyzed()`: Build a program and run scope analysis on it
- `import_from()`, `const()`, `call()`, `member()`, `obj()`: Statements and expressions
- `jsx()`, `attr()`, `expr()`, `text()`: Markup
- `function_def()`, `arrow()`, `class_def()`, `method()`: Components
- `comment()`: Source comments carrying hints

### test_helpers.py
File-based utilities:
- `create_temp_config_file()`: Context manager for temporary YAML config files
- `create_temp_directory()`: Context manager for temporary directories
- `write_ast_file()`: Write a JSON syntax tree file
- `babel_file()`, `loc()`: Minimal @babel/parser JSON output

## Usage Examples

```python
from tests.utils.tree_helpers import analyzed, call, import_from, stmt

tree = analyzed(
    import_from("i18next", default="i18next"),
    stmt(call("i18next.t", "greeting", line=2)),
)
```
"""

from .test_helpers import (
    babel_file,
    create_temp_config_file,
    create_temp_directory,
    loc,
    write_ast_file,
)

__all__ = [
    "babel_file",
    "create_temp_config_file",
    "create_temp_directory",
    "loc",
    "write_ast_file",
]
