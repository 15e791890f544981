import io

from surfmesh.io import write_obj
from surfmesh.surfaces import PlaneSurface, SphereSurface
from surfmesh.tessellator import generate


def _lines(text, prefix):
    return [line for line in text.splitlines() if line.startswith(prefix + ' ')]


def test_write_obj_plane():
    buf = io.StringIO()
    write_obj(generate((1, 1), PlaneSurface()), buf, name='plane')
    text = buf.getvalue()

    assert 'o plane' in text
    assert _lines(text, 'v') == ['v 0 0 0', 'v 1 0 0', 'v 0 0 1', 'v 1 0 1']
    assert _lines(text, 'vt') == ['vt 0 0', 'vt 1 0', 'vt 0 1', 'vt 1 1']
    assert _lines(text, 'f') == ['f 1/1 3/3 2/2', 'f 2/2 3/3 4/4']


def test_write_obj_keeps_all_triangles(tmp_path):
    mesh = generate((2, 2), SphereSurface())
    path = tmp_path / 'sphere.obj'
    write_obj(mesh, path)

    text = path.read_text(encoding='ascii')
    assert len(_lines(text, 'v')) == mesh.vertex_count
    assert len(_lines(text, 'vt')) == mesh.vertex_count
    assert len(_lines(text, 'f')) == mesh.triangle_count
