"""Intcode Interactive Demo.

A Gradio web interface for running and visualizing Intcode execution.

Usage:
    cd /path/to/intcode
    python demo/gradio_app.py

Features:
    - Paste or load example Intcode programs
    - Run a single machine with its two inputs
    - See the step-by-step execution trace
    - Search an amplifier network for its best phase settings
"""

import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import gradio as gr
from intcode import AmplifierNetwork, IntcodeError, IntcodeProgram, parse_program


# =============================================================================
# Example Programs
# =============================================================================

EXAMPLE_PROGRAMS = {
    "Quine": "109,1,204,-1,1001,100,1,100,1008,100,16,101,1006,101,0,99",
    "Large immediate": "104,1125899906842624,99",
    "16-digit product": "1102,34915192,34915192,7,4,7,99,0",
    "Equals 8 (position)": "3,9,8,9,10,9,4,9,99,-1,8",
    "Less than 8 (immediate)": "3,3,1107,-1,8,3,4,3,99",
    "Jump test": "3,3,1105,-1,9,1101,0,0,12,4,12,99,1",
    "Feedback amplifier": (
        "3,26,1001,26,-4,26,3,27,1002,27,2,27,1,27,26,"
        "27,4,27,1001,28,-1,28,1005,28,6,99,0,0,5"
    ),
    "Serial amplifier": "3,15,3,16,1002,16,10,16,1,16,15,15,4,15,99,0,0",
    "Custom": "",
}

TRACE_LIMIT = 200


# =============================================================================
# Execution Functions
# =============================================================================

def run_program(source: str, first_input: int, second_input: int, max_cycles: int) -> tuple:
    """Execute an Intcode program to completion and return results.

    Returns:
        Tuple of (summary_text, trace_text, outputs_text)
    """
    if not source.strip():
        return "Error: No program provided", "", ""

    try:
        memory = parse_program(source)
    except ValueError as e:
        return f"Error: {e}", "", ""

    program = IntcodeProgram(
        memory,
        int(first_input),
        int(second_input),
        trace=True,
        max_cycles=int(max_cycles),
    )

    outputs = []
    error_msg = None
    try:
        outputs = program.run_to_completion()
    except IntcodeError as e:
        error_msg = str(e)
        outputs = program.get_summary()["outputs"]

    # Format summary
    summary = program.get_summary()
    summary_lines = [
        "EXECUTION SUMMARY",
        "=" * 40,
        f"Cycles: {summary['cycles']}",
        f"Halted: {'Yes' if summary['halted'] else 'No'}",
        f"Pointer: {summary['pointer']}",
        f"Relative base: {summary['relative_base']}",
        f"Memory: {summary['memory_size']} cells",
    ]
    if error_msg:
        summary_lines.append(f"\nRuntime: {error_msg}")
    summary_text = "\n".join(summary_lines)

    # Format trace
    trace_lines = [
        "EXECUTION TRACE",
        "=" * 60,
    ]
    for entry in program.trace[:TRACE_LIMIT]:
        line = f"[{entry.cycle:>5}] @{entry.pointer:<5} {entry.raw:<6} {entry.instruction}"
        if entry.output is not None:
            line += f"  => {entry.output}"
        trace_lines.append(line)
    if len(program.trace) > TRACE_LIMIT:
        trace_lines.append(f"\n... ({len(program.trace) - TRACE_LIMIT} more entries)")
    trace_text = "\n".join(trace_lines)

    outputs_text = "\n".join(str(value) for value in outputs) or "(no output)"
    return summary_text, trace_text, outputs_text


def search_amplifiers(source: str, amplifier_count: int, phase_bias: int) -> str:
    """Find the phase ordering with the highest final signal."""
    if not source.strip():
        return "Error: No program provided"

    try:
        network = AmplifierNetwork(
            parse_program(source),
            amplifier_count=int(amplifier_count),
            phase_bias=int(phase_bias),
        )
        phases, signal = network.best_phases()
    except (ValueError, IntcodeError) as e:
        return f"Error: {e}"

    return "\n".join([
        "AMPLIFIER SEARCH",
        "=" * 30,
        f"Best phases: {','.join(str(p) for p in phases)}",
        f"Max signal:  {signal}",
    ])


def load_example(example_name: str) -> str:
    """Load an example program."""
    return EXAMPLE_PROGRAMS.get(example_name, "")


# =============================================================================
# Gradio Interface
# =============================================================================

def create_demo():
    """Create and return the Gradio demo interface."""

    with gr.Blocks(title="Intcode Demo", theme=gr.themes.Soft()) as demo:
        gr.Markdown("""
        # Intcode VM

        A pausable virtual machine for integer-encoded programs. Every output
        suspends the machine; resuming continues exactly where it stopped.

        **Pipeline**: `fetch -> decode -> registry -> execute -> state`
        """)

        with gr.Row():
            with gr.Column(scale=2):
                gr.Markdown("### Program")

                example_dropdown = gr.Dropdown(
                    choices=list(EXAMPLE_PROGRAMS.keys()),
                    value="Quine",
                    label="Load Example"
                )

                program_input = gr.Textbox(
                    value=EXAMPLE_PROGRAMS["Quine"],
                    label="Intcode",
                    lines=8,
                    placeholder="Comma-separated integers..."
                )

                gr.Markdown("### Single Run")

                with gr.Row():
                    first_input = gr.Number(value=1, precision=0, label="First Input")
                    second_input = gr.Number(value=0, precision=0, label="Second Input")

                max_cycles = gr.Slider(
                    minimum=100,
                    maximum=1000000,
                    value=100000,
                    step=100,
                    label="Max Cycles"
                )

                run_button = gr.Button("Run Program", variant="primary")

                gr.Markdown("### Amplifier Search")

                with gr.Row():
                    amplifier_count = gr.Slider(
                        minimum=1,
                        maximum=7,
                        value=AmplifierNetwork.DEFAULT_AMPLIFIERS,
                        step=1,
                        label="Amplifiers"
                    )
                    phase_bias = gr.Radio(
                        choices=[AmplifierNetwork.SERIAL_PHASE_BIAS, AmplifierNetwork.FEEDBACK_PHASE_BIAS],
                        value=AmplifierNetwork.FEEDBACK_PHASE_BIAS,
                        label="Phase Bias",
                        info="0: serial chain | 5: feedback loop"
                    )

                search_button = gr.Button("Search Phases")

            with gr.Column(scale=3):
                with gr.Row():
                    summary_output = gr.Textbox(
                        label="Summary",
                        lines=10,
                        interactive=False
                    )
                    outputs_output = gr.Textbox(
                        label="Outputs",
                        lines=10,
                        interactive=False
                    )

                search_output = gr.Textbox(
                    label="Amplifier Search",
                    lines=4,
                    interactive=False
                )

                trace_output = gr.Textbox(
                    label="Execution Trace",
                    lines=20,
                    interactive=False
                )

        with gr.Accordion("Instruction Reference", open=False):
            gr.Markdown("""
            | Opcode | Name | Effect |
            |--------|------|--------|
            | `1` | ADD | `c = a + b` |
            | `2` | MUL | `c = a * b` |
            | `3` | IN | `a = next input` |
            | `4` | OUT | output `a`, suspend |
            | `5` | JNZ | jump to `b` if `a != 0` |
            | `6` | JZ | jump to `b` if `a == 0` |
            | `7` | LT | `c = 1 if a < b else 0` |
            | `8` | EQ | `c = 1 if a == b else 0` |
            | `9` | ARB | relative base `+= a` |
            | `99` | HALT | stop |

            **Modes** (hundreds digit upward, one per parameter):
            `0` position, `1` immediate, `2` relative
            """)

        # Event handlers
        example_dropdown.change(
            fn=load_example,
            inputs=[example_dropdown],
            outputs=[program_input]
        )

        run_button.click(
            fn=run_program,
            inputs=[program_input, first_input, second_input, max_cycles],
            outputs=[summary_output, trace_output, outputs_output]
        )

        search_button.click(
            fn=search_amplifiers,
            inputs=[program_input, amplifier_count, phase_bias],
            outputs=[search_output]
        )

    return demo


# =============================================================================
# Main
# =============================================================================

if __name__ == "__main__":
    demo = create_demo()
    demo.launch(
        share=False,
        server_name="0.0.0.0",
        server_port=7861,
        show_error=True
    )
