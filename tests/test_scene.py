import pytest

from raytracer.box import Box
from raytracer.composite import Composite
from raytracer.material import Material
from raytracer.scene import Scene, add_obj_materials, load_material, load_obj, load_scene
from raytracer.sphere import Sphere
from raytracer.triangle import Triangle
from raytracer.vector import Vec3

MATERIAL_LINE = "define material red 1 0 0 1 0 0 0 0 0 1 0 1 1\n"


def _write(directory, text, name="scene.sdf"):
    path = directory / name
    path.write_text(text)
    return path


def _load(tmp_path, text):
    return load_scene(_write(tmp_path, text), tmp_path, tmp_path)


def test_load_material_reads_fields():
    mat = load_material("red 1 2 3 4 5 6 7 8 9 10")
    assert mat.name == "red"
    assert mat.ka == Vec3(1, 2, 3)
    assert mat.kd == Vec3(4, 5, 6)
    assert mat.ks == Vec3(7, 8, 9)
    assert mat.m == 10


def test_load_material_missing_values_raise():
    with pytest.raises(ValueError):
        load_material("red 1 2 3")


def test_find_scene_material():
    mat = load_material("red 1 2 3 4 5 6 7 8 9 10")
    scene = Scene()
    scene.materials[mat.name] = mat
    assert scene.find_mat("not a material name") is None
    added = scene.find_mat(mat.name)
    assert added is mat
    assert added.name == mat.name


def test_load_scene_shapes_and_lights(tmp_path):
    scene = _load(
        tmp_path,
        "# a comment line\n"
        + MATERIAL_LINE
        + "define shape box b1 0 0 0 1 2 3 red\n"
        + "define shape sphere s1 0 0 -5 2 red\n"
        + "define shape triangle t1 0 0 0 1 0 0 0 1 0 red\n"
        + "define light bulb 0 10 0 1 1 1 5\n",
    )
    assert scene.root.child_count() == 3
    assert isinstance(scene.find_shape("b1"), Box)
    assert isinstance(scene.find_shape("s1"), Sphere)
    assert isinstance(scene.find_shape("t1"), Triangle)
    assert scene.find_shape("b1").material is scene.find_mat("red")
    assert len(scene.lights) == 1
    light = scene.lights[0]
    assert light.name == "bulb"
    assert light.position == Vec3(0, 10, 0)
    assert light.brightness == 5


def test_ambient_colour_is_read_in_rbg_order(tmp_path):
    scene = _load(tmp_path, "define ambient amb 0.1 0.2 0.3 2\n")
    assert scene.ambient.name == "amb"
    assert scene.ambient.color.r == pytest.approx(0.1)
    assert scene.ambient.color.b == pytest.approx(0.2)
    assert scene.ambient.color.g == pytest.approx(0.3)
    assert scene.ambient.brightness == 2


def test_camera_vectors_are_normalized(tmp_path):
    scene = _load(tmp_path, "define camera eye 45 1 2 3 0 0 -4 0 3 0\n")
    camera = scene.camera
    assert camera.name == "eye"
    assert camera.fov_x == 45
    assert camera.position == Vec3(1, 2, 3)
    assert camera.direction == Vec3(0, 0, -1)
    assert camera.up == Vec3(0, 1, 0)


def test_unknown_material_raises(tmp_path):
    with pytest.raises(KeyError):
        _load(tmp_path, "define shape box b1 0 0 0 1 1 1 missing\n")


def test_transform_translate_moves_shape(tmp_path):
    scene = _load(tmp_path, MATERIAL_LINE + "define shape box b1 0 0 0 1 1 1 red\ntransform b1 translate 1 2 3\n")
    box = scene.find_shape("b1")
    assert box.min() == Vec3(1, 2, 3)


def test_transform_unknown_shape_raises(tmp_path):
    with pytest.raises(KeyError):
        _load(tmp_path, "transform ghost translate 1 2 3\n")


def test_composite_takes_children_from_root(tmp_path):
    scene = _load(
        tmp_path,
        MATERIAL_LINE
        + "define shape box b1 0 0 0 1 1 1 red\n"
        + "define shape sphere s1 5 0 0 1 red\n"
        + "define shape sphere s2 9 0 0 1 red\n"
        + "define shape composite grp b1 s1\n"
        + "add grp s2\n",
    )
    group = scene.find_shape("grp")
    assert isinstance(group, Composite)
    assert group.child_count() == 3
    assert scene.root.child_count() == 1
    assert scene.find_shape("b1") is None
    assert isinstance(group.find_child("s2"), Sphere)


def test_add_to_non_composite_raises(tmp_path):
    with pytest.raises(TypeError):
        _load(
            tmp_path,
            MATERIAL_LINE + "define shape box b1 0 0 0 1 1 1 red\ndefine shape box b2 2 2 2 3 3 3 red\nadd b1 b2\n",
        )


def test_add_obj_materials(tmp_path):
    mtl = _write(
        tmp_path,
        "# materials\nnewmtl glass\nKa 0.1 0.1 0.1\nKd 0.5 0.6 0.7\nKs 1 1 1\nNs 50\nd 0.5\nNi 1.5\n",
        "mats.mtl",
    )
    scene = Scene()
    add_obj_materials(mtl, scene)
    glass = scene.find_mat("glass")
    assert glass.kd == Vec3(0.5, 0.6, 0.7)
    assert glass.m == 50
    assert glass.opacity == 0.5
    assert glass.ior == 1.5
    assert glass.glossy == pytest.approx(0.04)


def test_mtl_property_before_newmtl_raises(tmp_path):
    mtl = _write(tmp_path, "Kd 1 1 1\n", "bad.mtl")
    with pytest.raises(ValueError):
        add_obj_materials(mtl, Scene())


def test_load_obj_builds_faces(tmp_path):
    _write(tmp_path, "newmtl plain\nKd 1 0 0\n", "shape.mtl")
    _write(
        tmp_path,
        "mtllib shape.mtl\n"
        "v 0 0 0\nv 1 0 0\nv 0 1 0\nv 1 1 0\n"
        "vn 0 0 1\n"
        "usemtl plain\n"
        "f 1 2 3\n"
        "f 2//1 4//1 3//1\n",
        "shape.obj",
    )
    scene = Scene()
    composite = load_obj(tmp_path, "shape", scene)
    assert composite.name == "shape"
    assert composite.child_count() == 2
    face0 = composite.find_child("face0")
    face1 = composite.find_child("face1")
    assert face0.material is scene.find_mat("plain")
    assert face0.normal == Vec3(0, 0, 1)
    assert face1.normal == Vec3(0, 0, 1)
    assert face1.v0 == Vec3(1, 0, 0)


def test_load_obj_unknown_material_raises(tmp_path):
    _write(tmp_path, "v 0 0 0\nusemtl nothing\n", "broken.obj")
    with pytest.raises(KeyError):
        load_obj(tmp_path, "broken", Scene())


def test_obj_shape_in_scene(tmp_path):
    _write(tmp_path, "v 0 0 0\nv 1 0 0\nv 0 1 0\nf 1 2 3\n", "tri.obj")
    scene = _load(tmp_path, "define shape obj tri\n")
    tri = scene.find_shape("tri")
    assert isinstance(tri, Composite)
    assert tri.child_count() == 1


def test_render_line_writes_image(tmp_path):
    out = tmp_path / "out"
    out.mkdir()
    sdf = _write(
        tmp_path,
        MATERIAL_LINE + "define shape box b1 -1 -1 -10 1 1 -8 red\nrender pic.ppm 2 2 1 0\n",
    )
    load_scene(sdf, tmp_path, out)
    text = (out / "pic.ppm").read_text()
    assert text.startswith("P3 2 2 255 \n")
    assert len(text.split()) == 4 + 2 * 2 * 3


def test_root_bounds_cover_children(tmp_path):
    scene = _load(
        tmp_path,
        MATERIAL_LINE + "define shape box b1 0 0 0 1 1 1 red\ndefine shape box b2 -2 -2 -2 -1 -1 -1 red\n",
    )
    assert scene.root.min() == Vec3(-2, -2, -2)
    assert scene.root.max() == Vec3(1, 1, 1)
    assert scene.root.area() == pytest.approx(Box(Vec3(), Vec3(1, 1, 1)).area() * 2)


def test_duplicate_material_keeps_first(tmp_path):
    scene = _load(tmp_path, MATERIAL_LINE + "define material red 0 1 0 0 1 0 0 0 0 1 0 1 1\n")
    assert scene.find_mat("red").ka == Vec3(1, 0, 0)
    assert isinstance(scene.find_mat("red"), Material)