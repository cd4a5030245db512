"""Tests for the filter graph compiler and the concat list builder."""

from pathlib import Path

import pytest

from storyreel.filtergraph import (
    AUDIO_OUT,
    FilterGraph,
    build_concat_list,
    compile_synced_graph,
)
from storyreel.models import FilterNode, Scene
from storyreel.timeline import build_timeline


def _timeline(*durations, transition=0.5, fps=30):
    scenes = [
        Scene(
            index=i, source_index=i,
            image_path=Path(f"s{i}.png"), audio_path=Path(f"s{i}.mp3"),
            audio_duration=d,
        )
        for i, d in enumerate(durations, start=1)
    ]
    return build_timeline(scenes, transition=transition, fps=fps)


def _outputs_starting(graph, prefix):
    return [n.output for n in graph.nodes if n.output.startswith(prefix)]


class TestSyncedGraph:
    def test_one_video_and_audio_producer_per_scene_in_order(self):
        graph = compile_synced_graph(_timeline(2.0, 3.0, 1.5, 4.0))
        assert _outputs_starting(graph, "v_") == ["v_0", "v_1", "v_2", "v_3"]
        assert _outputs_starting(graph, "a_") == ["a_0", "a_1", "a_2", "a_3"]

    def test_inputs_are_interleaved_image_audio(self):
        graph = compile_synced_graph(_timeline(2.0, 3.0))
        by_tag = {n.output: n for n in graph.nodes}
        assert by_tag["img_0"].inputs == ("0:v",)
        assert by_tag["a_0"].inputs == ("1:a",)
        assert by_tag["img_1"].inputs == ("2:v",)
        assert by_tag["a_1"].inputs == ("3:a",)
        assert graph.input_count == 4

    def test_single_scene_passthrough(self):
        graph = compile_synced_graph(_timeline(4.0))
        assert not any("xfade" in n.expression for n in graph.nodes)
        assert graph.video_out == "v_0"
        concat = graph.nodes[-1]
        assert concat.output == AUDIO_OUT
        assert concat.inputs == ("a_0",)
        assert concat.expression == "concat=n=1:v=0:a=1"

    def test_three_scene_crossfades(self):
        graph = compile_synced_graph(_timeline(2.0, 3.0, 1.5))
        xfades = [n for n in graph.nodes if n.expression.startswith("xfade")]
        assert [n.render() for n in xfades] == [
            "[v_0][v_1]xfade=transition=fade:duration=0.500:offset=1.500[x_1]",
            "[x_1][v_2]xfade=transition=fade:duration=0.500:offset=2.500[x_2]",
        ]
        assert graph.video_out == "x_2"

    def test_audio_concat_in_scene_order(self):
        graph = compile_synced_graph(_timeline(2.0, 3.0, 1.5))
        concat = graph.nodes[-1]
        assert concat.render() == "[a_0][a_1][a_2]concat=n=3:v=0:a=1[outa]"
        assert graph.audio_out == "outa"

    def test_scene_video_trimmed_to_audio_duration(self):
        graph = compile_synced_graph(_timeline(2.0, 3.25, fps=24))
        v1 = next(n for n in graph.nodes if n.output == "v_1")
        assert "trim=duration=3.250" in v1.expression
        assert "loop=loop=-1:size=1" in v1.expression
        # Constant frame rate must survive setpts for xfade to accept it.
        assert v1.expression.endswith("setpts=PTS-STARTPTS,fps=24")

    def test_scale_and_pad_to_resolution(self):
        graph = compile_synced_graph(_timeline(2.0), resolution=(1280, 720))
        img = graph.nodes[0]
        assert "scale=1280:720:force_original_aspect_ratio=decrease" in img.expression
        assert "pad=1280:720" in img.expression
        assert "format=yuv420p" in img.expression

    def test_producers_before_consumers(self):
        graph = compile_synced_graph(_timeline(2.0, 3.0, 1.5, 2.2, 1.1))
        seen = set()
        for node in graph.nodes:
            for tag in node.inputs:
                assert ":" in tag or tag in seen
            seen.add(node.output)

    def test_tags_unique(self):
        graph = compile_synced_graph(_timeline(2.0, 3.0, 1.5))
        tags = graph.tags()
        assert len(tags) == len(set(tags))

    def test_compiling_twice_is_identical(self):
        tl = _timeline(2.0, 3.0, 1.5)
        assert compile_synced_graph(tl).render() == compile_synced_graph(tl).render()

    def test_render_joins_with_semicolons(self):
        graph = compile_synced_graph(_timeline(2.0, 3.0))
        assert graph.render().count(";") == len(graph.nodes) - 1


class TestGraphValidate:
    def test_rejects_consumer_before_producer(self):
        graph = FilterGraph(
            nodes=(
                FilterNode("x", "null", ("later",), "x"),
                FilterNode("later", "null", ("0:v",), "later"),
            ),
            video_out="x", audio_out=None, input_count=1,
        )
        with pytest.raises(ValueError, match="before it is produced"):
            graph.validate()

    def test_rejects_duplicate_tags(self):
        graph = FilterGraph(
            nodes=(
                FilterNode("v", "null", ("0:v",), "v"),
                FilterNode("v", "null", ("0:v",), "v"),
            ),
            video_out="v", audio_out=None, input_count=1,
        )
        with pytest.raises(ValueError, match="Duplicate"):
            graph.validate()

    def test_rejects_out_of_range_input(self):
        graph = FilterGraph(
            nodes=(FilterNode("v", "null", ("3:v",), "v"),),
            video_out="v", audio_out=None, input_count=2,
        )
        with pytest.raises(ValueError, match="only 2 inputs"):
            graph.validate()

    def test_rejects_unproduced_final_tag(self):
        graph = FilterGraph(
            nodes=(FilterNode("v", "null", ("0:v",), "v"),),
            video_out="v", audio_out="outa", input_count=1,
        )
        with pytest.raises(ValueError, match="never produced"):
            graph.validate()


class TestConcatList:
    def test_file_and_duration_lines(self):
        text = build_concat_list(["/img/a.png", "/img/b.png"], frame_rate=1)
        assert text == (
            "file '/img/a.png'\n"
            "duration 1\n"
            "file '/img/b.png'\n"
            "duration 1\n"
        )

    def test_duration_is_inverse_frame_rate(self):
        text = build_concat_list(["/img/a.png"], frame_rate=4)
        assert "duration 0.25\n" in text

    def test_single_quotes_escaped(self):
        text = build_concat_list(["/img/it's.png"], frame_rate=1)
        assert text.splitlines()[0] == "file '/img/it'\\''s.png'"

    def test_one_entry_per_image(self):
        text = build_concat_list([f"/img/{i}.png" for i in range(5)], frame_rate=2)
        assert text.count("file ") == 5
        assert text.count("duration 0.5") == 5

    def test_non_positive_frame_rate_raises(self):
        with pytest.raises(ValueError):
            build_concat_list(["/img/a.png"], frame_rate=0)
