"""
Test suite for the PatchMon uninstall helper.

- Unit tests for the command runner, crontab, service and UI helpers
- Sequencer tests against a sandboxed filesystem and a fake host
- End-to-end runs through the command line entry point
"""
