"""Demo: compute a few sections, save them and export the session to CSV."""

from pathlib import Path

from sectioncalc import (
    RESULT_FIELDS,
    CalculatorSession,
    ShapeKind,
    export_filename,
    format_value,
)


def main():
    session = CalculatorSession()

    # ── Solid circle, r = 10 mm ───────────────────────────────────
    session.set_parameter("r", "10")
    session.save()

    # ── RHS 100x200 with a 50x100 void ───────────────────────────
    session.select_shape(ShapeKind.RECTANGLE_HOLLOW)
    session.update_parameters({"b_o": "100", "h_o": "200", "b_i": "50", "h_i": "100"})
    session.save()

    # ── I section ────────────────────────────────────────────────
    session.select_shape(ShapeKind.I_SECTION)
    session.update_parameters(
        {"b_f": "127", "t_f": "10.7", "t_w": "7.1", "D": "304.4", "d_1": "283"}
    )
    session.save()

    for saved in session.store:
        print(f"{saved.shape.value}: {dict(saved.parameters)}")
        for name in RESULT_FIELDS:
            print(f"  {name:>2} = {format_value(getattr(saved.result, name))}")

    output_dir = Path("output")
    output_dir.mkdir(exist_ok=True)
    # colons are not portable in file names
    output_path = output_dir / export_filename().replace(":", "-")
    output_path.write_text(session.store.export_csv(), encoding="utf-8")
    print(f"Exported {len(session.store)} results to {output_path}")


if __name__ == "__main__":
    main()
