"""
Headless terminal host: runs a ROM in real time and prints each drawn frame.

No keyboard input is captured, so a ROM waiting on FX0A stays blocked; wire
`chip8.set_key` to a key source (e.g. 1234/qwer/asdf/zxcv) for interactive ROMs.
"""

import argparse
import time

from octocore import Interpreter, Pacer, Chip8Error


def render(pixels) -> str:
    return "\n".join("".join("#" if on else "." for on in row) for row in pixels.tolist())


if __name__ == "__main__":
    parser = argparse.ArgumentParser(
        description="Run a CHIP-8 ROM and print frames to the terminal"
    )
    parser.add_argument("rom", type=str, help="Path to the ROM file")
    parser.add_argument(
        "--seconds",
        type=float,
        default=5.0,
        help="Wall-clock time to run for (default: 5.0)",
    )
    parser.add_argument(
        "--legacy_shift",
        action="store_true",
        help="Use the VY-source forms of 8XY6/8XYE",
    )
    parser.add_argument(
        "--clock_frequency",
        type=int,
        default=1000,
        help="Instructions per second (default: 1000)",
    )
    args = parser.parse_args()

    chip8 = Interpreter(legacy_shift=args.legacy_shift)
    with open(args.rom, "rb") as f:
        chip8.load(f.read())

    pacer = Pacer(clock_frequency=args.clock_frequency)
    deadline = time.monotonic() + args.seconds
    frames = 0

    try:
        while time.monotonic() < deadline:
            chip8.catch_up(pacer)
            if chip8.draw_ready():
                print(f"\x1b[H{render(chip8.pixels())}")
                chip8.acknowledge_draw()
                frames += 1
            time.sleep(0.001)
    except Chip8Error as error:
        print(f"Interpreter stopped: {error}")

    print(f"Frames drawn: {frames}, invalid opcodes: {chip8.invalid_opcodes}")
