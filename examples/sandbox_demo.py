#!/usr/bin/env python3
"""
Demo script for the compile-and-run sandbox.

Compiles and runs a small program in each supported language and shows
how compile failures are reported.
"""

import asyncio
import logging
import sys
from pathlib import Path

# Add package to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from polysandbox import DockerEngine, Language, SandboxError, submit

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

COUNTING_C_CODE = """
#include <stdio.h>
int main() {
    for (int i = 0; i < 10; i++) {
        printf("%d\\n", i);
    }
    return 0;
}
"""

HELLO_PROGRAMS = {
    Language.CPP: '#include <iostream>\nint main() { std::cout << "Hello from C++"; return 0; }\n',
    Language.RUST: 'fn main() { print!("Hello from Rust"); }\n',
    Language.GO: 'package main\nimport "fmt"\nfunc main() { fmt.Print("Hello from Go") }\n',
}


def print_output(result):
    compile_output = result.compile_output
    execute_output = result.execute_output
    print(f"🔧 Compiled: {compile_output.success} (exit code: {compile_output.exit_code})")
    if compile_output.stderr:
        print(f"📝 Compiler stderr:\n{compile_output.stderr}")
    print(f"✅ Executed: {execute_output.success} (exit code: {execute_output.exit_code})")
    print(f"📝 STDOUT:\n{execute_output.stdout}")


async def demo_c_program():
    """Demo the counting C program."""
    print("\n=== Demo: C Program ===")
    result = await submit(COUNTING_C_CODE, Language.C)
    print_output(result)


async def demo_other_languages():
    """Demo C++, Rust and Go."""
    for language, code in HELLO_PROGRAMS.items():
        print(f"\n=== Demo: {language.name} Program ===")
        try:
            result = await submit(code, language)
            print_output(result)
        except SandboxError as e:
            print(f"❌ Sandbox error: {e}")


async def demo_compile_failure():
    """Demo a program that does not compile."""
    print("\n=== Demo: Compile Failure ===")
    result = await submit("int main() { return }", Language.C)
    print_output(result)


async def main():
    """Run all sandbox demos."""
    print("🚀 Sandbox Demo")
    print("=" * 50)

    try:
        DockerEngine().preflight(Language.C)
        print("✅ Docker is available and sandbox-c is ready!")

        await demo_c_program()
        await demo_other_languages()
        await demo_compile_failure()

        print("\n🎉 All demos completed!")

    except SandboxError as e:
        print(f"❌ Sandbox error: {e}")
        print("\n💡 Make sure Docker is installed and running and that the")
        print("   sandbox-c, sandbox-cpp, sandbox-rust and sandbox-go images are built.")


if __name__ == "__main__":
    asyncio.run(main())
