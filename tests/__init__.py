"""janusspec test suite.

Folder taxonomy
- unit/      : Isolated, fast checks of a single module/class/function.
- e2e/       : The ``janusspec`` command driven through Click's CliRunner.
- fixtures/  : Shared pytest fixtures (no tests here).

General guidance
- Keep unit fast and deterministic; async timeouts use small bounds.
- Prefer the in-memory RecordingReporter over capturing console output.
- Property-based tests use hypothesis and live with the layer they exercise.
"""
