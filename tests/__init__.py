"""tdbind test suite.

Folder taxonomy
- unit/         : One module at a time; engines are in-memory fakes.
- contract/     : The engine port's behavior, run against every adapter.
- integration/  : Generated bindings imported and driven through the runtime.
- e2e/          : The `tdbind` command line through Click's CliRunner.
- helpers/      : Schema builders, engine responders, module loaders (no tests).

Property-based tests live with the layer they exercise and are marked
`property`.
"""
