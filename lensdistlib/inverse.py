# Shared inversion of distortion models that have no closed-form inverse

import logging

import numpy as np

logger = logging.getLogger(__name__)

TOLERANCE = 1e-12
MAX_ITERATIONS = 50


def residual(transform, x, y, xd, yd):
    """
    Distance between the forward transform of the ideal coordinates (x, y) and the observed distorted
    coordinates (xd, yd).
    """
    xe, ye = transform(x, y)
    return np.hypot(np.asarray(xd, dtype=float) - xe, np.asarray(yd, dtype=float) - ye)


def fixed_point_inverse(transform, xd, yd, tolerance=TOLERANCE, max_iterations=MAX_ITERATIONS):
    """
    Iterative inverse of a forward distortion transform.

    Starts with the distorted coordinates as estimate of the ideal coordinates and repeatedly adds the residual
    between the observation and the transformed estimate. This converges as long as the distortion is close to
    the identity, which holds for real lenses within their calibrated field of view.

    Parameters:
        transform (callable): Forward model, (x, y) -> (xd, yd).
        xd, yd (float or np.ndarray): Observed distorted coordinates.
        tolerance (float): Stop when the largest residual norm falls below this value.
        max_iterations (int): Upper bound on the number of correction steps.

    Returns:
        tuple: Estimated ideal coordinates (x, y). The last estimate is returned even if the iteration did not
        converge.
    """
    xd = np.asarray(xd, dtype=float)
    yd = np.asarray(yd, dtype=float)
    x = xd.copy()
    y = yd.copy()

    err = np.inf
    for _ in range(int(max_iterations)):
        xe, ye = transform(x, y)
        dx = xd - xe
        dy = yd - ye
        x = x + dx
        y = y + dy
        err = np.max(np.hypot(dx, dy), initial=0.0)
        if not err >= tolerance:
            # also ends on nan, more iterations would not recover from it
            return x, y

    logger.debug("inverse distortion stopped after %d iterations, residual %g", max_iterations, err)
    return x, y


def refined_inverse(transform, xd, yd, xtol=TOLERANCE, maxfev=1000):
    """
    Inverse of a forward distortion transform that polishes the fixed-point estimate with a nonlinear solver.
    Use this if distortion is strong enough that the fixed-point iteration may not converge. Slow, as every point
    is solved separately.
    """
    from scipy.optimize import fsolve

    xd = np.asarray(xd, dtype=float)
    yd = np.asarray(yd, dtype=float)
    x0, y0 = fixed_point_inverse(transform, xd, yd)

    shape = np.broadcast(xd, yd).shape
    xd_flat, yd_flat = np.broadcast_to(xd, shape).ravel(), np.broadcast_to(yd, shape).ravel()
    x0_flat, y0_flat = np.broadcast_to(x0, shape).ravel(), np.broadcast_to(y0, shape).ravel()

    x = np.empty(xd_flat.shape)
    y = np.empty(yd_flat.shape)
    for i, p_d in enumerate(zip(xd_flat, yd_flat)):
        def opt_func(p):
            xe, ye = transform(p[0], p[1])
            return [xe - p_d[0], ye - p_d[1]]

        sol, info, ier, msg = fsolve(opt_func, [x0_flat[i], y0_flat[i]], full_output=True, xtol=xtol,
                                     maxfev=maxfev)
        if ier != 1:
            logger.debug("refined inverse distortion did not converge at (%g, %g): %s", p_d[0], p_d[1], msg)
        x[i], y[i] = sol

    return x.reshape(shape), y.reshape(shape)
