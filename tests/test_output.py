"""SVG export, printed tickets and terminal summaries."""

from PIL import ImageFont

from pizza.config import DB_PATH_ENV, PRINTER_WIDTH_PX
from pizza.count import Count
from pizza.diagram import draw_pie, draw_pies
from pizza.export import export_svgs, svg_filename
from pizza.main import main
from pizza.models import PieConfig, UpdateEvent
from pizza.persistence import bootstrap_schema, save_update
from pizza.printer import print_pie_plan, render_pie_image, resolve_printer_font_path
from pizza.rendering import format_pie_plan
from pizza.toppings import composite, plain

PEP = plain("Pepperoni")
HAWAII = composite("Ham", "Pineapple")
EIGHT = PieConfig(slices_per_part=2, parts_per_pie=4)


class FakePrinter:
    def __init__(self) -> None:
        self.images = []
        self.cuts = 0

    def image(self, img) -> None:
        self.images.append(img)

    def cut(self) -> None:
        self.cuts += 1


def test_export_writes_one_svg_per_pie(tmp_path) -> None:
    (tmp_path / "pie-09.svg").write_text("stale", encoding="utf-8")
    diagrams = draw_pies(EIGHT, Count.from_list([(PEP, 10)]))
    written = export_svgs(diagrams, tmp_path)

    assert [path.name for path in written] == ["pie-01.svg", "pie-02-unallocated.svg"]
    assert not (tmp_path / "pie-09.svg").exists()
    assert written[0].read_text(encoding="utf-8").startswith("<svg")


def test_svg_filename() -> None:
    assert svg_filename(3, draw_pie(8, [(PEP, 8)])) == "pie-03.svg"


def test_render_pie_image_is_paper_width() -> None:
    font = ImageFont.load_default()
    full = render_pie_image(draw_pie(8, [(PEP, 5), (HAWAII, 3)]), font)
    residue = render_pie_image(draw_pie(8, [(PEP, 2)], uncovered=True), font, index=2)
    empty = render_pie_image(draw_pie(0, []), font)
    for img in (full, residue, empty):
        assert img.mode == "1"
        assert img.width == PRINTER_WIDTH_PX
        assert img.height > PRINTER_WIDTH_PX


def test_print_pie_plan_prints_each_pie_then_cuts() -> None:
    printer = FakePrinter()
    diagrams = draw_pies(EIGHT, Count.from_list([(PEP, 10), (HAWAII, 8)]))
    print_pie_plan(diagrams, printer=printer, font=ImageFont.load_default())
    assert len(printer.images) == len(diagrams) == 3
    assert printer.cuts == 1


def test_print_pie_plan_skips_empty_plans() -> None:
    printer = FakePrinter()
    print_pie_plan([], printer=printer)
    assert printer.images == []
    assert printer.cuts == 0


def test_font_override(tmp_path, monkeypatch) -> None:
    font_file = tmp_path / "font.ttf"
    font_file.write_bytes(b"")
    monkeypatch.setenv("PIZZA_PRINTER_FONT_PATH", str(font_file))
    assert resolve_printer_font_path() == str(font_file)


def test_format_pie_plan() -> None:
    assert format_pie_plan([]).plain == "(no pies needed)"

    summary = format_pie_plan(draw_pies(EIGHT, Count.from_list([(PEP, 10)]))).plain
    assert summary.startswith("1 full pie(s) + 1 to complete")
    assert "#1 8/8  Pepperoni 8" in summary
    assert "#2 2/8 unallocated  Pepperoni 2" in summary


def test_main_exports_stored_orders(tmp_path, monkeypatch) -> None:
    db = tmp_path / "orders.db"
    monkeypatch.setenv(DB_PATH_ENV, str(db))
    bootstrap_schema()
    save_update(UpdateEvent("ana", PEP, 8))

    out = tmp_path / "svgs"
    exit_code = main(["--db", str(db), "--export", str(out), "--log-file", str(tmp_path / "debug.log")])
    assert exit_code == 0
    assert sorted(path.name for path in out.iterdir()) == ["pie-01.svg"]

    assert main(["--db", str(db), "--reset", "--log-file", str(tmp_path / "debug.log")]) == 0
    assert main(["--db", str(db), "--export", str(out), "--log-file", str(tmp_path / "debug.log")]) == 0
    assert list(out.iterdir()) == []


def test_main_rejects_bad_config(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv(DB_PATH_ENV, str(tmp_path / "x.db"))
    monkeypatch.setenv("PIZZA_SLICES_PER_PART", "0")
    assert main(["--db", str(tmp_path / "x.db"), "--log-file", str(tmp_path / "debug.log")]) == 2
