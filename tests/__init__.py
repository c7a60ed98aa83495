"""PATHKIT test suite.

Folder taxonomy
- unit/         : Isolated, fast checks of a single module/class/function.
                  File operations run against `MemoryFileSystem`.
- contract/     : Behavior every `FileSystem` adapter must honor, parametrized
                  over the in-memory and local adapters.
- integration/  : Path operations against the host file system (tmp_path).
- e2e/          : The `pathkit` command line, driven through CliRunner.

General guidance
- Keep unit fast and deterministic (no real I/O); prefer the in-memory
  filesystem over mocks.
- Property-based tests live with the layer they exercise and use
  @pytest.mark.property.
"""
