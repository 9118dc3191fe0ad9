from raytracer.material import Material
from raytracer.vector import Vec3


def test_defaults():
    mat = Material()
    assert mat.name == "default"
    assert mat.ka == Vec3(0.2, 0.2, 0.2)
    assert mat.kd == Vec3(0.5, 0.5, 0.5)
    assert mat.ks == Vec3()
    assert (mat.m, mat.glossy, mat.opacity, mat.ior) == (0, 0, 1, 1)


def test_str_format():
    mat = Material("red", Vec3(1, 2, 3), Vec3(4, 5, 6), Vec3(7, 8, 9), 10)
    assert str(mat) == "(name:red\nka:(1, 2, 3)\nkd(4, 5, 6)\nks(7, 8, 9)\nm10)"


def test_fields_are_mutable():
    mat = Material()
    mat.kd = Vec3(1, 0, 0)
    assert mat.kd == Vec3(1, 0, 0)
    assert Material().kd == Vec3(0.5, 0.5, 0.5)