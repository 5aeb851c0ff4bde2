import io

import pytest

from raytracer.progress import Observer, ProgressObserver


class _Clock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


def _observer(name="Render"):
    stream = io.StringIO()
    clock = _Clock()
    return ProgressObserver(name, stream=stream, clock=clock), stream, clock


def _bar(text):
    return text[text.index("[") + 1:text.index("]")]


def test_half_way_output():
    observer, stream, clock = _observer()
    clock.now = 2.0
    observer.update(0.5)
    assert stream.getvalue() == (
        "\rRender: [" + "=" * 20 + ">" + " " * 19 + "] 50.0% | 2.0s | ETA: 2.0s"
    )


def test_bar_is_forty_wide():
    observer, stream, clock = _observer()
    observer.update(0.3)
    assert len(_bar(stream.getvalue())) == 40
    assert _bar(stream.getvalue()).count(">") == 1


def test_small_step_is_ignored():
    observer, stream, clock = _observer()
    observer.update(0.5)
    before = stream.getvalue()
    observer.update(0.502)
    assert stream.getvalue() == before


def test_zero_progress_prints_nothing():
    observer, stream, clock = _observer()
    observer.update(0.0)
    assert stream.getvalue() == ""


def test_completion_prints_done_without_eta():
    observer, stream, clock = _observer()
    clock.now = 1.0
    observer.update(1.0)
    text = stream.getvalue()
    assert text.endswith(" | Done!\n")
    assert "ETA" not in text
    assert ">" not in _bar(text)


def test_completion_is_printed_even_after_close_update():
    observer, stream, clock = _observer()
    observer.update(0.999)
    observer.update(1.0)
    assert stream.getvalue().count("Done!") == 1


def test_no_eta_at_start():
    observer, stream, clock = _observer()
    observer.update(0.03)
    assert "ETA" not in stream.getvalue()


def test_name_can_be_changed():
    observer, stream, clock = _observer("Preview")
    observer.name = "Final"
    observer.update(0.2)
    assert stream.getvalue().startswith("\rFinal: [")


def test_observer_is_abstract():
    with pytest.raises(TypeError):
        Observer()