"""
Solvable Board Generator - Interactive Demo

Run with: streamlit run app/demo.py
"""

import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import streamlit as st
from typing import Any, List, Optional, Sequence, Tuple

from safeboard import (
    Board,
    SolvableBoardGenerator,
    SolveResult,
    build_safe_zone,
    find_fifty_fifty_patterns,
    solve,
)
from safeboard.config import max_allowed_mines


def cell_style(width: int) -> Tuple[int, str]:
    """Scale cell size based on board width."""
    if width >= 30:
        return 14, "10px"
    if width >= 25:
        return 16, "11px"
    if width >= 16:
        return 20, "13px"
    return 26, "15px"


def render_board_html(
    board: Board,
    result: SolveResult,
    safe_zone: Sequence[Tuple[int, int]],
    highlight_cell: Optional[Tuple[int, int]] = None,
) -> str:
    """Render the layout as HTML, shading the part deduction reaches."""
    cell_size, font_size = cell_style(board.columns)
    safe = set(safe_zone)

    colors = {
        "1": "#0000ff",
        "2": "#008000",
        "3": "#ff0000",
        "4": "#000080",
        "5": "#800000",
        "6": "#008080",
        "7": "#000000",
        "8": "#808080",
    }

    html = '<div style="font-family: monospace; line-height: 1.2;">'
    html += '<table style="border-collapse: collapse; margin: auto;">'

    for y in range(board.rows):
        html += "<tr>"
        for x in range(board.columns):
            key = board.key(x, y)
            cell = board.cells[y][x]

            if key in result.flagged:
                display = "F"  # Deduced mine
                bg = "#ffa500"
                text_color = "#ffffff"
            elif cell.is_mine:
                display = "M"  # Mine deduction never reached
                bg = "#ffcccc"
                text_color = "#ff0000"
            elif key in result.revealed:
                display = str(cell.adjacent_mines) if cell.adjacent_mines else " "
                bg = "#e8f5e9" if (x, y) in safe else "#ffffff"
                text_color = colors.get(display, "#000000")
            else:
                display = "?"  # Safe cell that needs a guess
                bg = "#c0c0c0"
                text_color = "#666666"

            border = "2px solid #ff0000" if (x, y) == highlight_cell else "1px solid #999"

            html += f'''<td style="
                width: {cell_size}px; height: {cell_size}px;
                text-align: center;
                background: {bg};
                border: {border};
                color: {text_color};
                font-weight: bold;
                font-size: {font_size};
            ">{display}</td>'''
        html += "</tr>"

    html += "</table></div>"
    return html


def main():
    st.set_page_config(
        page_title="Solvable Minesweeper Generator",
        page_icon="💣",
        layout="wide",
    )

    st.title("Solvable Minesweeper Generator")
    st.markdown("""
    Places mines so the board can be cleared from the first click by deduction alone.
    """)

    # Sidebar configuration
    st.sidebar.header("Board Configuration")

    preset = st.sidebar.selectbox(
        "Difficulty Preset",
        ["Easy (9x9, 10)", "Medium (16x16, 40)", "Hard (30x16, 99)", "Custom"],
    )

    if preset == "Easy (9x9, 10)":
        columns, rows, mines = 9, 9, 10
    elif preset == "Medium (16x16, 40)":
        columns, rows, mines = 16, 16, 40
    elif preset == "Hard (30x16, 99)":
        columns, rows, mines = 30, 16, 99
    else:
        columns = st.sidebar.slider("Width", 5, 50, 16)
        rows = st.sidebar.slider("Height", 5, 50, 16)
        max_mines = max_allowed_mines(columns * rows)
        mines = st.sidebar.slider("Mines", 1, max_mines, min(40, max_mines))

    first_x = st.sidebar.slider("First click x", 0, columns - 1, columns // 2)
    first_y = st.sidebar.slider("First click y", 0, rows - 1, rows // 2)

    if "board" not in st.session_state:
        st.session_state.board = None
        st.session_state.metrics = None
        st.session_state.success = None
        st.session_state.settings = None

    current_settings = (columns, rows, mines, first_x, first_y)
    if st.session_state.settings != current_settings:
        st.session_state.board = None
        st.session_state.settings = current_settings

    safe_zone = build_safe_zone(first_x, first_y, columns, rows)

    col1, col2 = st.columns([3, 1])

    with col1:
        st.subheader("Board")
        if st.button("Generate Board", type="primary"):
            board = Board(rows, columns)
            generator = SolvableBoardGenerator(board, mines)
            st.session_state.success = generator.generate(safe_zone)
            st.session_state.metrics = generator.metrics()
            st.session_state.board = board
            st.rerun()

        board = st.session_state.board
        if board is not None:
            result = solve(board, safe_zone)
            html = render_board_html(board, result, safe_zone, highlight_cell=(first_x, first_y))
            st.markdown(html, unsafe_allow_html=True)

            if st.session_state.success:
                st.success("Solvable from the first click without guessing.")
            else:
                st.warning("No guess-free layout found; showing the last attempt.")

            st.markdown("""
            <div style="font-size: 12px; margin-top: 10px;">
            <b>Legend:</b>
            <span style="background: #e8f5e9; padding: 2px 6px; margin: 0 4px;">&nbsp;</span> Safe zone
            <span style="color: #0000ff; font-weight: bold; margin: 0 4px;">1-8</span> Deduced number
            <span style="background: #ffa500; color: white; padding: 2px 6px; margin: 0 4px; font-weight: bold;">F</span> Deduced mine
            <span style="background: #ffcccc; color: #ff0000; padding: 2px 6px; margin: 0 4px; font-weight: bold;">M</span> Unreached mine
            <span style="background: #c0c0c0; color: #666666; padding: 2px 6px; margin: 0 4px; font-weight: bold;">?</span> Needs a guess
            </div>
            """, unsafe_allow_html=True)
        else:
            st.info("Click 'Generate Board' to place mines for this first click.")

    with col2:
        st.subheader("Generator Statistics")

        board = st.session_state.board
        metrics = st.session_state.metrics
        if board is not None and metrics is not None:
            result = solve(board, safe_zone)
            stats: List[Tuple[str, Any]] = [
                ("Result", "Solvable" if st.session_state.success else "Needs guess"),
                ("Attempts", metrics["attempts_count"]),
                ("Repair iterations", metrics["repair_iterations"]),
                ("Accepted swaps", metrics["swaps_accepted"]),
                ("Unsolved cells", result.unsolved_count),
            ]
            for label, value in stats:
                st.metric(label, value)

            fifty_fifties = find_fifty_fifty_patterns(board, result)
            if fifty_fifties:
                st.markdown("**50/50 pairs**")
                for a, b in fifty_fifties:
                    st.text(f"{a} / {b}")
        else:
            st.info("Generate a board to see statistics.")

        st.markdown("---")
        st.subheader("Algorithm Info")
        st.markdown("""
        1. **Place**: random mines outside the 3x3 first-click zone
        2. **Solve**: flood fill plus forced mines / forced clears
        3. **Repair**: move blocking mines far from the click, keep improving moves
        4. **Retry**: up to 40 fresh layouts
        """)


if __name__ == "__main__":
    main()
