#!/usr/bin/env python3
"""
Smoke test for sandbox functionality.

This test verifies that the sandbox can be imported and that command
construction and workspace handling work without requiring Docker.
"""

import sys
import tempfile
from pathlib import Path

# Add package to path
sys.path.insert(0, str(Path(__file__).parent))

from polysandbox import (
    CommandBuilder,
    CommandOutput,
    Language,
    SandboxConfig,
    SandboxError,
    Workspace,
)


def test_sandbox_config():
    """Test sandbox configuration."""
    print("✅ Testing SandboxConfig...")

    config = SandboxConfig()
    assert config.engine == "docker"
    assert config.mount_path == "/home/sandbox/mnt/"
    assert config.timeout_seconds == 30.0

    custom_config = SandboxConfig(mount_path="/work/", timeout_seconds=5)
    assert custom_config.mount_path == "/work/"
    assert custom_config.timeout_seconds == 5

    print("✅ SandboxConfig tests passed!")


def test_command_output():
    """Test CommandOutput."""
    print("✅ Testing CommandOutput...")

    empty = CommandOutput.unattempted()
    assert empty.success is False
    assert empty.stdout == ""
    assert empty.stderr == ""

    print("✅ CommandOutput tests passed!")


def test_commands():
    """Test command construction for every language."""
    print("✅ Testing command construction...")

    builder = CommandBuilder()
    with tempfile.TemporaryDirectory() as temp_dir:
        for language in Language:
            with Workspace.create("", language, root=temp_dir) as workspace:
                command = builder.compile_command(workspace, language)
                assert command[:4] == ["docker", "run", "--rm", "--volume"]
                assert command[-1] == f"mnt/input.{language.profile.extension}"
                print(f"  ✅ {language.value}: {' '.join(command[5:])}")

    try:
        Language.parse("java")
        print("  ❌ Unsupported language not detected")
        return False
    except SandboxError:
        print("  ✅ Unsupported language correctly rejected")

    print("✅ Command construction tests passed!")
    return True


def test_workspace_cleanup():
    """Test that workspaces are removed."""
    print("✅ Testing workspace cleanup...")

    with tempfile.TemporaryDirectory() as temp_dir:
        with Workspace.create("int main() {}", Language.C, root=temp_dir) as workspace:
            path = workspace.path
            assert workspace.source_path.exists()
        assert not path.exists()

    print("✅ Workspace cleanup tests passed!")


def main():
    """Run all smoke tests."""
    print("🚀 Running Sandbox Smoke Tests")
    print("=" * 40)

    try:
        test_sandbox_config()
        test_command_output()

        if test_commands():
            test_workspace_cleanup()

            print("\n🎉 All smoke tests passed!")
            print("\n💡 To test actual code execution, ensure Docker is running and use:")
            print("   python examples/sandbox_demo.py")
            return True
        else:
            print("\n❌ Some tests failed!")
            return False

    except Exception as e:
        print(f"\n❌ Unexpected error: {e}")
        import traceback
        traceback.print_exc()
        return False


if __name__ == "__main__":
    success = main()
    sys.exit(0 if success else 1)
