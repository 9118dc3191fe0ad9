from raytracer.animation import Animation, BodyAnimation, CamAnimation, Interval
from raytracer.bodypart import Pose
from raytracer.moviemaker import generate_movie, main, render_movie, write_to_sdf
from raytracer.vector import Vec3


def _make_pose_dir(root):
    for folder, count in (("walk", 8), ("halt", 5), ("steal", 10)):
        directory = root / folder
        directory.mkdir(parents=True)
        for i in range(1, count + 1):
            (directory / f"pose{i:02d}.txt").write_text(f"head {i} 0 0\noffset 0 0 0\n")
    return root


def _object_map():
    return {"b line": Interval(0, 10), "a line": Interval(0, 10), "late": Interval(5, 1)}


def _animations():
    return [Animation("box", "translate", Interval(0, 10), Vec3(1, 2, 3))]


def _cam_animations():
    return [
        CamAnimation(Interval(0, 10), Vec3(1, 2, 3), Vec3(0, 0, -1)),
        CamAnimation(Interval(0, 10), Vec3(9, 9, 9), Vec3(0, 0, -1)),
    ]


def test_write_to_sdf_frame_count(tmp_path):
    write_to_sdf(_object_map(), _animations(), _cam_animations(), [], 2, 1.5, tmp_path, 4, 3, 1, 2)
    names = sorted(p.name for p in tmp_path.iterdir())
    assert names == ["frame0000.sdf", "frame0001.sdf", "frame0002.sdf"]


def test_write_to_sdf_frame_contents(tmp_path):
    write_to_sdf(_object_map(), _animations(), _cam_animations(), [], 2, 1.5, tmp_path, 4, 3, 1, 2)
    text = (tmp_path / "frame0000.sdf").read_text()
    assert text == (
        "\na line\nb line\n\n"
        "transform box translate 1 2 3\n\n"
        "define camera eye 60 1 2 3 0 0 -1 0 1 0\n"
        "render frame0000.ppm 4 3 1 2\n"
    )
    assert "9 9 9" not in text


def test_write_to_sdf_body_only_while_active(tmp_path):
    pose = Pose({"head": Vec3(1, 2, 3)})
    body_animations = [BodyAnimation(pose, pose, Interval(0, 0.5))]
    write_to_sdf(
        _object_map(), _animations(), _cam_animations(), body_animations, 2, 1.5, tmp_path, 4, 3, 1, 2
    )
    first = (tmp_path / "frame0000.sdf").read_text()
    second = (tmp_path / "frame0001.sdf").read_text()
    assert first.count("define shape composite body chest\n") == 1
    assert first.count("transform head rotate 1 2 3\n") == 1
    assert second.count("define shape composite body chest") == 0
    assert second.startswith("\na line\nb line\n")


def test_generate_movie(tmp_path):
    res = _make_pose_dir(tmp_path / "res")
    out = tmp_path / "files"
    generate_movie(res, out)
    assert len(list(out.glob("frame*.sdf"))) == 984
    first = (out / "frame0000.sdf").read_text()
    assert "define shape box floor 0 0 0 10000 1 2000 white\n" in first
    assert "define shape box wb1" not in first
    assert first.endswith("render frame0000.ppm 1920 1080 2 4\n")
    later = (out / "frame0024.sdf").read_text()
    assert "define shape box wb1 -20 0 -20 20 40 20 white\n" in later
    assert "transform wb1 translate 370 0 -110\n" in later


def test_render_movie_prints_names(tmp_path, capsys):
    src = tmp_path / "src"
    src.mkdir()
    (src / "frame0000.sdf").write_text("define material red 1 0 0 1 0 0 1 0 0 1\n")
    render_movie(0, 1, src, tmp_path, tmp_path)
    assert capsys.readouterr().out == "frame0000.sdf\nframe0001.sdf\n"


def test_main_generates_without_rendering(tmp_path, capsys):
    res = _make_pose_dir(tmp_path / "res")
    files = tmp_path / "files"
    images = tmp_path / "images"
    code = main(
        [
            "--res-dir", str(res),
            "--files-dir", str(files),
            "--images-dir", str(images),
            "--start", "1",
            "--end", "0",
        ]
    )
    assert code == 0
    assert capsys.readouterr().out == "generate sdfs\nrender sdfs\n"
    assert (files / "frame0983.sdf").exists()
    assert images.is_dir()