## matrix transformation operations for 3D homogeneous coordinates
## in monotile
## Copyright (c) 2023 monotile contributors

# Permission is hereby granted, free of charge, to any person
# obtaining a copy of this software and associated documentation files
# (the "Software"), to deal in the Software without restriction,
# including without limitation the rights to use, copy, modify, merge,
# publish, distribute, sublicense, and/or sell copies of the Software,
# and to permit persons to whom the Software is furnished to do so,
# subject to the following conditions:
#
# The above copyright notice and this permission notice shall be
# included in all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
# EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF
# MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND
# NONINFRINGEMENT. IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS
# BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER IN AN
# ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN
# CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

from math import cos, sin

from monotile import geom

## a matrix is represented as a list of four four vectors, one per
## row.  Points are lifted into homogeneous 4 vectors with geom.vect()
## before multiplication, so Mx always implies a column vector.


def _isnum(x):
    return (not isinstance(x, bool)) and isinstance(x, (int, float))


class Matrix:
    """4x4 transformation matrix for homogeneous 3D coordinates"""

    def __init__(self, a=None):
        self.m = [[1, 0, 0, 0],
                  [0, 1, 0, 0],
                  [0, 0, 1, 0],
                  [0, 0, 0, 1]]

        if isinstance(a, Matrix):
            for i in range(4):
                self.m[i] = list(a.getrow(i))

        elif isinstance(a, (tuple, list)):
            if len(a) == 4 and all(isinstance(r, (tuple, list)) and len(r) == 4 for r in a):
                for i in range(4):
                    for j in range(4):
                        self.set(i, j, a[i][j])
            elif len(a) == 16:
                for i in range(4):
                    for j in range(4):
                        self.set(i, j, a[i * 4 + j])
            else:
                raise ValueError('bad thing used in attempt to initialize matrix: {}'.format(a))

        elif a is not None:
            raise ValueError('bad thing used in attempt to initialize matrix: {}'.format(a))

    def __repr__(self):
        return "Matrix({},{},{},{})".format(*self.m)

    #return value indexed by i,j
    def get(self, i, j):
        if i < 0 or i > 3 or j < 0 or j > 3:
            raise ValueError('bad index passed to get: {},{}'.format(i, j))
        return self.m[i][j]

    #set value indexed by i,j
    def set(self, i, j, x):
        if i < 0 or i > 3 or j < 0 or j > 3:
            raise ValueError('bad index passed to set: {},{}'.format(i, j))
        if not _isnum(x):
            raise ValueError('bad value passed to set: {}'.format(x))
        self.m[i][j] = x

    def getrow(self, i):
        if i < 0 or i > 3:
            raise ValueError('bad row passed to getrow: {}'.format(i))
        return self.m[i]

    def getcol(self, j):
        if j < 0 or j > 3:
            raise ValueError('bad column passed to getcol: {}'.format(j))
        return [self.m[0][j],
                self.m[1][j],
                self.m[2][j],
                self.m[3][j]]

    # matrix multiply.  If x is a matrix, compute MX.  If x is a 4
    # vector, compute Mx.  Anything else is an error.

    def mul(self, x):
        if isinstance(x, Matrix):
            result = Matrix()
            for i in range(4):
                for j in range(4):
                    result.set(i, j, _dot4(self.getrow(i), x.getcol(j)))
            return result
        elif isinstance(x, (list, tuple)) and len(x) == 4:
            return [_dot4(self.getrow(i), x) for i in range(4)]

        raise ValueError('bad thing passed to mul(): {}'.format(x))

    def apply(self, points):
        """Transform a sequence of ``geom.Point`` values, preserving order."""
        return [geom.Point.from_vect(self.mul(geom.vect(p))) for p in points]


def _dot4(a, b):
    return a[0]*b[0] + a[1]*b[1] + a[2]*b[2] + a[3]*b[3]


# return the generalized 4x4 arbitrary axis rotation matrix, angle
# in degrees, right-handed about axis
def Rotation(axis, angle, inverse=False):
    m = geom.mag(axis)
    u = axis
    if m < geom.epsilon:
        raise ValueError('zero-length rotation axis not allowed')
    if not geom.close(m, 1.0):
        u = axis.scale(1.0/m)

    if inverse:
        angle *= -1.0
    rad = (angle % 360.0)*geom.pi2/360.0

    ux = u.x
    uy = u.y
    uz = u.z

    cang = cos(rad)
    cmin = 1.0-cang
    sang = sin(rad)

    # see http://www.opengl-tutorial.org/assets/faq_quaternions/index.html#Q38
    R = [[cang + ux*ux*cmin, ux*uy*cmin-uz*sang, ux*uz*cmin+uy*sang, 0],
         [uy*ux*cmin+uz*sang, cang + uy*uy*cmin, uy*uz*cmin - ux*sang, 0],
         [uz*ux*cmin-uy*sang, uz*uy*cmin+ux*sang, cang+uz*uz*cmin, 0],
         [0, 0, 0, 1]]

    return Matrix(R)


def Translation(delta, inverse=False):
    if inverse:
        delta = delta.scale(-1.0)
    T = [[1, 0, 0, delta.x],
         [0, 1, 0, delta.y],
         [0, 0, 1, delta.z],
         [0, 0, 0, 1]]
    return Matrix(T)


def Scale(x, y=None, z=None, inverse=False):
    if not _isnum(x):
        raise ValueError('bad scaling values passed to Scale')
    sx = x
    if _isnum(y) and _isnum(z):
        sy = y
        sz = z
    else:
        sy = sz = x

    if inverse:
        sx = 1.0/sx
        sy = 1.0/sy
        sz = 1.0/sz

    S = [[sx, 0, 0, 0],
         [0, sy, 0, 0],
         [0, 0, sz, 0],
         [0, 0, 0, 1.0]]
    return Matrix(S)


## mirror across the YZ plane, x -> -x.  Note that this inverts the
## winding of any polygon it is applied to.
def Mirror():
    return Scale(-1, 1, 1)
