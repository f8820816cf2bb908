# finchcmake

`finchcmake` works out what a CMake build script means without running
CMake. It is the analysis core of a CMake-to-Buck2 migration tool. It walks a
CMake syntax tree and keeps track of:

- variables, with how sure it is about each value,
- cache variables made by `option()`,
- platform checks such as `WIN32` or `APPLE`,
- targets made by `add_library()` and `add_executable()`, together with their
  include directories, link libraries and compile definitions.

Any value that cannot be known until build time stays in the result and is
marked as less than certain. A later stage can then turn it into a Buck2
`select()`.

## What it does not do

The package does not read CMake text. It has no lexer and no parser, and it
has no command-line tool. You build the syntax tree yourself from the node
classes in `finchcmake.ast`, or from the output of a parser of your own. The
package also writes no Buck2 files. It stops at the analysis.

## Building a tree and analysing it

```python
from finchcmake import ast
from finchcmake.evaluator import CMakeFileEvaluator

tree = ast.File(statements=[
    ast.CommandCall("project", [ast.Identifier("Demo")]),
    ast.CommandCall("option", [
        ast.Identifier("ENABLE_TESTS"),
        ast.StringLiteral("Enable testing", quoted=True),
        ast.Identifier("ON"),
    ]),
    ast.CommandCall("set", [ast.Identifier("MODE"), ast.StringLiteral("fast")]),
    ast.CommandCall("add_executable", [
        ast.Identifier("demo"), ast.Identifier("main.cpp"), ast.Identifier("util.cpp"),
    ]),
    ast.CommandCall("target_link_libraries", [
        ast.Identifier("demo"), ast.Identifier("PRIVATE"), ast.Identifier("fmt::fmt"),
    ]),
])

analysis = CMakeFileEvaluator().analyze(tree)
analysis.project_name                  # "Demo"
analysis.targets[0].sources            # ["main.cpp", "util.cpp"]
analysis.targets[0].link_libraries     # ["fmt::fmt"]
analysis.cache_variables["ENABLE_TESTS"]   # "ON"
analysis.global_variables["MODE"]      # "fast"
```

`CMakeFileEvaluator` starts from a context that already holds the built-in
variables. Its methods are:

- `evaluate_file(file)` evaluates every statement into that context.
- `analyze(file)` does the same and returns a `ProjectAnalysis`. This holds
  `project_name`, `project_version`, `targets`, `global_variables` and
  `cache_variables`, with the values as plain strings. `project_version` comes
  from a `PROJECT_VERSION` variable. `project()` does not set that variable, so
  the field stays empty unless the script sets it.
- `get_variable(name)` and `list_variables()` read the context.

## What the evaluator understands

`CMakeEvaluator(context)` evaluates single nodes against an
`EvaluationContext`. It handles these commands:

- `set`: one value is stored as it is. Several values are stored as a list,
  with the lowest confidence among them.
- `option`: stores `ON` or `OFF` as a cache variable with uncertain
  confidence.
- `project`: sets `PROJECT_NAME` and `CMAKE_PROJECT_NAME`.
- `cmake_minimum_required`: sets `CMAKE_MINIMUM_REQUIRED_VERSION` from the
  value after `VERSION`.
- `add_library`: the type is `STATIC`, `SHARED` or `INTERFACE` and defaults
  to static. `add_executable` declares an executable.
- `target_include_directories`, `target_link_libraries` and
  `target_compile_definitions`: add to a target that is already declared and
  skip `PUBLIC`, `PRIVATE` and `INTERFACE`.
- `message` and `if` as commands have no effect.

Any other command gives an empty value with unknown confidence.

For an `IfStatement`, the evaluator works out the value of the condition node
and applies CMake's truth rules. It then runs the matching branch:
`then_branch`, the first `elseif_branches` entry whose condition holds, or
`else_branch`. A condition is the value of a single node, not a full `if()`
expression. `BinaryOp`, `UnaryOp`, loops, function and macro definitions,
function calls and the `CPM*` nodes are not evaluated and give unknown
confidence.

A string literal has its known `${VAR}` references substituted. Unknown
references and `$ENV{...}` references are left as written.
`expand_variable_reference` looks a name up in the variables first and then in
the cache variables. `evaluate_platform_check("WIN32")` decides a platform check
from a certain built-in variable and caches the answer.

Errors are raised as `finchcmake.errors.AnalysisError`. They come from an
`ErrorNode`, a command with too few arguments, an unknown platform check, and
similar cases. When a whole `File` or `Block` is evaluated, a statement that
raises is logged at debug level and skipped, so the rest of the file is still
evaluated.

## Values and confidence

Every evaluated value is an `EvaluatedValue`. It holds a `value` (a string, a
bool, a float or a list of strings) and a `Confidence`. The levels, from
weakest to strongest, are `UNKNOWN`, `UNCERTAIN`, `LIKELY` and `CERTAIN`, and
they compare as integers. The helpers in `finchcmake.values` follow CMake's
own rules:

```python
from finchcmake.values import is_truthy, to_bool, to_double, to_list, to_string

to_string(["a", "b", "c"])   # "a;b;c"  (CMake list form)
to_string(True)              # "TRUE"
to_list("a;b;c")             # ["a", "b", "c"]
is_truthy("OFF")             # False
is_truthy("foo-NOTFOUND")    # False
is_truthy("ON")              # True
to_bool("maybe")             # None
to_double("3.5")             # 3.5
```

## Evaluation context

`EvaluationContext` holds the state that scripts build up. A child scope reads
through to its parent but keeps its own writes. Cache variables are never
inherited.

```python
from finchcmake.context import EvaluationContext

context = EvaluationContext(None)
context.initialize_builtin_variables()

context.get_variable("CMAKE_SOURCE_DIR").value   # "/source"
"CMAKE_BINARY_DIR" in context.list_variables()  # True

child = context.create_child_scope()
child.has_variable("CMAKE_SOURCE_DIR")          # True, inherited
```

The built-in platform variables (`WIN32`, `WINDOWS`, `UNIX`, `LINUX`, `APPLE`
and, on macOS, `DARWIN`) match the host the analysis runs on. Targets are
`Target` dataclasses with a `TargetType`. They can be read through
`context.targets` and looked up with `find_target(name)`.

## Source and token types

`finchcmake.source` provides `SourceBuffer`, which maps offsets in a text to
1-based lines and columns, and `SourceLocation`. `finchcmake.tokens` defines
the `TokenType` enumeration and the `Token` dataclass for CMake's lexical
structure, for use by a lexer you supply.