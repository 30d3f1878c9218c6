"""
Coordinate descent path solvers for the Gaussian, binomial and Poisson
elastic net.

Each solver follows the calling convention of the glmnet Fortran
routines `elnet`, `lognet` and `fishnet`: output buffers `a0`, `ca`,
`ia`, `nin`, `dev`/`rsq` and `alm` are allocated by the caller and
filled in place, active variable indices in `ia` are 1-based and
failures are reported through the status code `jerr`.

Problems are solved on the standardized scale,

    1/2 sum_i v_i (z_i - a0 - x_i'b)^2 +
        lambda sum_j vp_j (alpha |b_j| + (1 - alpha)/2 b_j^2)

subject to `cl[0] <= b <= cl[1]`, with `v` the (normalized)
observation weights for the Gaussian family and the IRLS weights
otherwise.
"""

import numpy as np
from scipy.special import expit, xlogy


class _NaiveUpdates(object):
    """
    Gradients from a residual vector, updated after each move.
    """

    def __init__(self, x, v, r):
        self.x = x
        self.vx = np.asfortranarray(v[:, None] * x)
        self.r = r

    def gradient(self, j):
        return self.x[:, j] @ self.r

    def move(self, j, d):
        self.r -= d * self.vx[:, j]

    def intercept(self, v, sv):
        d = self.r.sum() / sv
        self.r -= d * v
        return d


class _CovarianceUpdates(object):
    """
    Gradients from inner products of the predictors; used by the
    Gaussian solver when the intercept is profiled out.
    """

    def __init__(self, x, v, z):
        self.gram = x.T @ (v[:, None] * x)
        self.g = x.T @ (v * z)

    def gradient(self, j):
        return self.g[j]

    def move(self, j, d):
        self.g -= d * self.gram[:, j]


def _cd_pass(js, updates, a, xv, vp, cl, ab, dem, mm, ia, nx):
    """
    One cycle of coordinate updates over the variables `js`.

    Returns the largest weighted squared change and whether the
    active set grew beyond `nx`.
    """
    dlx = 0.
    for j in js:
        aj = a[j]
        u = updates.gradient(j) + xv[j] * aj
        s = abs(u) - vp[j] * ab
        if s > 0:
            anew = np.copysign(s, u) / (xv[j] + vp[j] * dem)
            anew = max(cl[0, j], min(cl[1, j], anew))
        else:
            anew = 0.
        if anew == aj:
            continue
        if not mm[j]:
            mm[j] = True
            ia.append(j)
            if len(ia) > nx:
                return dlx, True
        d = anew - aj
        a[j] = anew
        updates.move(j, d)
        dlx = max(dlx, xv[j] * d * d)
    return dlx, False


def _solve_quadratic(ju_idx, updates, a, aint, xv, v, vp, cl, ab, dem,
                     intr, thr, maxit, nlp, mm, ia, nx):
    """
    Solve the penalized weighted least squares problem at one lambda.

    Full cycles over all variables alternate with cycles over the
    active set until a full cycle changes nothing by more than `thr`.

    Returns
    -------
    tuple
        (status, aint, nlp); status is 0 on convergence, 1 if `maxit`
        passes were exceeded and 2 if the active set overflowed.
    """
    sv = v.sum()

    def _intercept_step(dlx):
        d = updates.intercept(v, sv)
        return d, max(dlx, sv * d * d)

    while True:
        nlp += 1
        dlx, overflow = _cd_pass(ju_idx, updates, a, xv, vp, cl, ab, dem, mm, ia, nx)
        if overflow:
            return 2, aint, nlp
        if intr:
            d, dlx = _intercept_step(dlx)
            aint += d
        if dlx < thr:
            return 0, aint, nlp
        if nlp > maxit:
            return 1, aint, nlp

        while True:
            nlp += 1
            dlx, _ = _cd_pass(list(ia), updates, a, xv, vp, cl, ab, dem, mm, ia, nx)
            if intr:
                d, dlx = _intercept_step(dlx)
                aint += d
            if dlx < thr:
                break
            if nlp > maxit:
                return 1, aint, nlp


def _standardize(x, w, isd, intr):
    """
    Center (if `intr`) and scale (if `isd`) the columns of `x` with
    weights `w` summing to one. Constant columns are flagged in `ju`
    and left unscaled.
    """
    ju = x.max(0) > x.min(0)
    if intr:
        xm = w @ x
    else:
        xm = np.zeros(x.shape[1])
    xc = x - xm[None, :]
    xs = np.ones(x.shape[1])
    if isd:
        xs[ju] = np.sqrt(w @ xc[:, ju]**2)
    return np.asfortranarray(xc / xs[None, :]), xm, xs, ju


def _penalty_factors(vp, ni):
    vp = np.maximum(np.asarray(vp, float).reshape(-1), 0)
    if vp.max() <= 0:
        return None
    return vp * ni / vp.sum()


def _lambda_max(updates, ju_idx, vp, parm):
    gmax = 0.
    for j in ju_idx:
        if vp[j] > 0:
            gmax = max(gmax, abs(updates.gradient(j)) / vp[j])
    return gmax / max(parm, 1e-3)


def _user_grid(flmin):
    # 2.0 is the sentinel for a user-supplied grid
    return flmin > 1


def _grid_step(flmin, nlam, eps):
    if _user_grid(flmin) or nlam < 2:
        return 1.
    return max(eps, flmin)**(1. / (nlam - 1))


def _store(m, a, ia, ca, nin, nx):
    k = min(len(ia), nx)
    if k > 0:
        ca[:k, m] = a[ia[:k]]
    nin[m] = k


def _unstandardize(lmu, ca, nin, ia, a0, xm, xs, scale=1., center=0.):
    idx = np.asarray(ia, int)
    for k in range(lmu):
        n = nin[k]
        ca[:n, k] = scale * ca[:n, k] / xs[idx[:n]]
        a0[k] = center + scale * a0[k] - ca[:n, k] @ xm[idx[:n]]


def _fill_ia(ia_buf, ia):
    k = min(len(ia), ia_buf.shape[0])
    ia_buf.reshape(-1)[:k] = np.asarray(ia[:k], int) + 1


def gaussnet(ka, parm, ni, no, x, y, w, vp, cl, ne, nx, nlam, flmin, ulam,
             thr, isd, intr, maxit, pb, lmu, a0, ca, ia, nin, rsq, alm, nlp,
             jerr, fdev=1e-5, eps=1e-6, big=9.9e35, mnlam=5, devmax=0.999,
             **control):
    """
    Gaussian elastic net path.

    `ka=1` uses covariance updates, `ka=2` naive (residual) updates.
    `rsq` receives the fraction of variance explained.

    As in glmnet, `y` is scaled by its (weighted) standard deviation `ys`
    and the whole penalty by `1/ys`. On the original scale the ridge
    term is therefore `lambda (1 - alpha)/(2 ys) ||b||_2^2`; the lasso
    term is unchanged.
    """
    x = np.asarray(x, float)
    y = np.asarray(y, float).reshape(-1)
    w = np.asarray(w, float).reshape(-1)
    a0, rsq, alm, nin = [np.asarray(b).reshape(-1) for b in [a0, rsq, alm, nin]]

    vp = _penalty_factors(vp, ni)
    if vp is None:
        return _result(0, a0, ca, ia, nin, rsq, alm, None, 0, 1000, 'rsq')

    w = w / w.sum()
    xs_, xm, xs, ju = _standardize(x, w, isd, intr)
    ju_idx = np.nonzero(ju)[0]
    if ju_idx.shape[0] == 0:
        return _result(0, a0, ca, ia, nin, rsq, alm, None, 0, 7777, 'rsq')

    ym = w @ y if intr else 0.
    ys = np.sqrt(w @ (y - ym)**2)
    z = (y - ym) / ys
    xv = w @ xs_**2
    cl = np.asarray(cl, float) * xs[None, :] / ys

    if ka == 1:
        updates = _CovarianceUpdates(xs_, w, z)
    else:
        updates = _NaiveUpdates(xs_, w, w * z)

    a = np.zeros(ni)
    mm = np.zeros(ni, bool)
    active = []
    alf = _grid_step(flmin, nlam, eps)
    mnl = min(mnlam, nlam)
    lmu, jerr, rsq0 = 0, 0, 0.
    alm_m = big

    for m in range(nlam):
        if _user_grid(flmin):
            alm_m = ulam.reshape(-1)[m] / ys
        elif m == 0:
            alm_m = big
        elif m == 1:
            alm_m = alf * _lambda_max(updates, ju_idx, vp, parm)
        else:
            alm_m *= alf
        ab, dem = alm_m * parm, alm_m * (1 - parm)

        # intercept is profiled out by centering
        status, _, nlp = _solve_quadratic(ju_idx, updates, a, 0., xv, w, vp, cl,
                                          ab, dem, False, thr, maxit, nlp, mm,
                                          active, nx)
        if status == 1:
            jerr = -(m + 1)
            break
        if status == 2:
            jerr = -10000 - (m + 1)
            break

        _store(m, a, active, ca, nin, nx)
        eta = xs_[:, active] @ a[active] if active else np.zeros(no)
        rsq[m] = 1 - w @ (z - eta)**2
        a0[m] = 0.
        alm[m] = alm_m
        lmu = m + 1
        if pb is not None:
            pb.update()

        gain, rsq0 = rsq[m] - rsq0, rsq[m]
        if m + 1 < mnl or _user_grid(flmin):
            continue
        if np.count_nonzero(ca[:nin[m], m]) > ne:
            break
        if gain < fdev * rsq[m]:
            break
        if rsq[m] > devmax:
            break

    _unstandardize(lmu, ca, nin, active, a0, xm, xs, scale=ys, center=ym)
    alm[:lmu] *= ys
    _fill_ia(ia, active)
    return _result(lmu, a0, ca, ia, nin, rsq, alm, None, nlp, jerr, 'rsq')


class _BinomialModel(object):

    def __init__(self, y, w, g, kopt, pmin):
        self.y, self.w, self.g = y, w, g
        self.kopt, self.pmin = kopt, pmin

    def _prob(self, eta):
        return np.clip(expit(eta), self.pmin, 1 - self.pmin)

    def working(self, eta):
        q = self._prob(eta)
        if self.kopt == 1:
            v = 0.25 * self.w
        else:
            v = self.w * q * (1 - q)
        return v, self.w * (self.y - q)

    def deviance(self, eta):
        q = self._prob(eta)
        y = self.y
        return 2 * np.sum(self.w * (xlogy(y, y / q) + xlogy(1 - y, (1 - y) / (1 - q))))

    def null_intercept(self, intr, mxitnr, epsnr):
        if not intr:
            return 0., 0
        ybar = self.w @ self.y
        if ybar <= self.pmin:
            return 0., 8000
        if ybar >= 1 - self.pmin:
            return 0., 9000
        a0 = np.log(ybar / (1 - ybar))
        if np.any(self.g != 0):
            for _ in range(mxitnr):
                q = expit(self.g + a0)
                d = self.w @ (self.y - q) / (self.w @ (q * (1 - q)))
                a0 += d
                if abs(d) < epsnr:
                    break
        return a0, 0


class _PoissonModel(object):

    def __init__(self, y, w, g, exmx):
        self.y, self.w, self.g = y, w, g
        self.exmx = exmx

    def _mean(self, eta):
        return np.exp(np.minimum(eta, self.exmx))

    def working(self, eta):
        mu = self._mean(eta)
        return self.w * mu, self.w * (self.y - mu)

    def deviance(self, eta):
        mu = self._mean(eta)
        return 2 * np.sum(self.w * (xlogy(self.y, self.y / mu) - (self.y - mu)))

    def null_intercept(self, intr, mxitnr, epsnr):
        if not intr:
            return 0., 0
        ybar = self.w @ self.y
        if ybar <= 0:
            return 0., 9999
        return np.log(ybar / (self.w @ np.exp(self.g))), 0


def _irls_path(model, parm, ni, no, xs_, ju_idx, vp, cl, ne, nx, nlam, flmin,
               ulam, thr, intr, maxit, pb, a0, ca, nin, dev, alm, nlp,
               fdev, eps, big, mnlam, devmax, mxit, aint):
    """
    Lambda path for the IRLS families: at each lambda a sequence of
    penalized weighted least squares problems is solved until the
    coefficients stop moving.
    """
    a = np.zeros(ni)
    mm = np.zeros(ni, bool)
    active = []
    alf = _grid_step(flmin, nlam, eps)
    mnl = min(mnlam, nlam)
    lmu, jerr, dev_prev = 0, 0, 0.
    alm_m = big

    eta = model.g + aint
    dev0 = model.deviance(eta)

    for m in range(nlam):
        v, r = model.working(eta)
        if _user_grid(flmin):
            alm_m = ulam.reshape(-1)[m]
        elif m == 0:
            alm_m = big
        elif m == 1:
            alm_m = alf * _lambda_max(_NaiveUpdates(xs_, v, r), ju_idx, vp, parm)
        else:
            alm_m *= alf
        ab, dem = alm_m * parm, alm_m * (1 - parm)

        status = 0
        for _ in range(mxit):
            v, r = model.working(eta)
            xv = v @ xs_**2
            a_old, aint_old = a.copy(), aint
            updates = _NaiveUpdates(xs_, v, r)
            status, aint, nlp = _solve_quadratic(ju_idx, updates, a, aint, xv, v,
                                                 vp, cl, ab, dem, intr, thr, maxit,
                                                 nlp, mm, active, nx)
            if status:
                break
            eta = model.g + aint
            if active:
                eta = eta + xs_[:, active] @ a[active]
            dlx = max(np.max(xv * (a - a_old)**2), v.sum() * (aint - aint_old)**2)
            if dlx < thr:
                break
        else:
            status = 1

        if status == 1:
            jerr = -(m + 1)
            break
        if status == 2:
            jerr = -10000 - (m + 1)
            break

        _store(m, a, active, ca, nin, nx)
        dev[m] = 1 - model.deviance(eta) / dev0
        a0[m] = aint
        alm[m] = alm_m
        lmu = m + 1
        if pb is not None:
            pb.update()

        gain, dev_prev = dev[m] - dev_prev, dev[m]
        if m + 1 < mnl or _user_grid(flmin):
            continue
        if np.count_nonzero(ca[:nin[m], m]) > ne:
            break
        if gain < fdev:
            break
        if dev[m] > devmax:
            break

    return lmu, active, nlp, jerr, dev0


def lognet(parm, ni, no, x, y, g, vp, cl, ne, nx, nlam, flmin, ulam, thr,
           isd, intr, maxit, kopt, pb, lmu, a0, ca, ia, nin, nulldev, dev,
           alm, nlp, jerr, fdev=1e-5, eps=1e-6, big=9.9e35, mnlam=5,
           devmax=0.999, pmin=1e-9, mxit=100, epsnr=1e-6, mxitnr=25, **control):
    """
    Binomial (logistic) elastic net path.

    `y` has two columns of weighted counts, positive responses in the
    first column. `kopt=1` uses the modified Newton (upper bound)
    weights.
    """
    x = np.asarray(x, float)
    y = np.asarray(y, float)
    g = np.asarray(g, float).reshape(-1)
    a0, dev, alm, nin = [np.asarray(b).reshape(-1) for b in [a0, dev, alm, nin]]

    vp = _penalty_factors(vp, ni)
    if vp is None:
        return _result(0, a0, ca, ia, nin, dev, alm, 0., 0, 1000, 'dev')

    ww = y.sum(1)
    sw = ww.sum()
    w = ww / sw
    yp = np.divide(y[:, 0], ww, out=np.zeros(no), where=ww > 0)

    xs_, xm, xs, ju = _standardize(x, w, isd, intr)
    ju_idx = np.nonzero(ju)[0]
    if ju_idx.shape[0] == 0:
        return _result(0, a0, ca, ia, nin, dev, alm, 0., 0, 7777, 'dev')
    cl = np.asarray(cl, float) * xs[None, :]

    model = _BinomialModel(yp, w, g, kopt, pmin)
    aint, jerr = model.null_intercept(intr, mxitnr, epsnr)
    if jerr:
        return _result(0, a0, ca, ia, nin, dev, alm, 0., 0, jerr, 'dev')

    (lmu,
     active,
     nlp,
     jerr,
     dev0) = _irls_path(model, parm, ni, no, xs_, ju_idx, vp, cl, ne, nx, nlam,
                        flmin, ulam, thr, intr, maxit, pb, a0, ca, nin, dev, alm,
                        nlp, fdev, eps, big, mnlam, devmax, mxit, aint)

    _unstandardize(lmu, ca, nin, active, a0, xm, xs)
    _fill_ia(ia, active)
    return _result(lmu, a0, ca, ia, nin, dev, alm, sw * dev0, nlp, jerr, 'dev')


def fishnet(parm, ni, no, x, y, w, g, vp, cl, ne, nx, nlam, flmin, ulam, thr,
            isd, intr, maxit, pb, lmu, a0, ca, ia, nin, nulldev, dev, alm, nlp,
            jerr, fdev=1e-5, eps=1e-6, big=9.9e35, mnlam=5, devmax=0.999, exmx=250.,
            mxit=100, epsnr=1e-6, mxitnr=25, **control):
    """
    Poisson elastic net path; `g` is the offset of the log mean.
    """
    x = np.asarray(x, float)
    y = np.asarray(y, float).reshape(-1)
    w = np.asarray(w, float).reshape(-1)
    g = np.asarray(g, float).reshape(-1)
    a0, dev, alm, nin = [np.asarray(b).reshape(-1) for b in [a0, dev, alm, nin]]

    vp = _penalty_factors(vp, ni)
    if vp is None:
        return _result(0, a0, ca, ia, nin, dev, alm, 0., 0, 1000, 'dev')

    sw = w.sum()
    w = w / sw

    xs_, xm, xs, ju = _standardize(x, w, isd, intr)
    ju_idx = np.nonzero(ju)[0]
    if ju_idx.shape[0] == 0:
        return _result(0, a0, ca, ia, nin, dev, alm, 0., 0, 7777, 'dev')
    cl = np.asarray(cl, float) * xs[None, :]

    model = _PoissonModel(y, w, g, exmx)
    aint, jerr = model.null_intercept(intr, mxitnr, epsnr)
    if jerr:
        return _result(0, a0, ca, ia, nin, dev, alm, 0., 0, jerr, 'dev')

    (lmu,
     active,
     nlp,
     jerr,
     dev0) = _irls_path(model, parm, ni, no, xs_, ju_idx, vp, cl, ne, nx, nlam,
                        flmin, ulam, thr, intr, maxit, pb, a0, ca, nin, dev, alm,
                        nlp, fdev, eps, big, mnlam, devmax, mxit, aint)

    _unstandardize(lmu, ca, nin, active, a0, xm, xs)
    _fill_ia(ia, active)
    return _result(lmu, a0, ca, ia, nin, dev, alm, sw * dev0, nlp, jerr, 'dev')


def _result(lmu, a0, ca, ia, nin, dev, alm, nulldev, nlp, jerr, devname):
    return {'lmu':lmu,
            'a0':a0,
            'ca':ca,
            'ia':ia,
            'nin':nin,
            devname:dev,
            'alm':alm,
            'nulldev':nulldev,
            'nlp':nlp,
            'jerr':jerr}
