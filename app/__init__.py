import click
from flask import Flask, jsonify
from config import config


def create_app(config_name='default'):
    """Application factory — creates and configures the Flask app."""
    app = Flask(__name__)
    app.config.from_object(config[config_name])

    # ── Logging ───────────────────────────────────────────────────
    from app.utils.logging import setup_logging
    setup_logging(app)

    # ── Blueprints ────────────────────────────────────────────────
    from app.main import main as main_blueprint
    app.register_blueprint(main_blueprint)

    from app.auth import auth as auth_blueprint
    app.register_blueprint(auth_blueprint, url_prefix='/auth')

    from app.catalog import catalog as catalog_blueprint
    app.register_blueprint(catalog_blueprint, url_prefix='/products')

    from app.cart import cart as cart_blueprint
    app.register_blueprint(cart_blueprint, url_prefix='/cart')

    from app.orders import orders as orders_blueprint
    app.register_blueprint(orders_blueprint, url_prefix='/orders')

    from app.address import address as address_blueprint
    app.register_blueprint(address_blueprint, url_prefix='/address')

    from app.admin import admin as admin_blueprint
    app.register_blueprint(admin_blueprint, url_prefix='/admin')

    # ── Cart badge ────────────────────────────────────────────────
    from app.cart.signals import attach_badge_header
    app.after_request(attach_badge_header)

    # ── Error Handlers ────────────────────────────────────────────
    @app.errorhandler(401)
    def unauthorized(e):
        return jsonify({'error': 'Please log in to continue.'}), 401

    @app.errorhandler(403)
    def forbidden(e):
        return jsonify({'error': 'Access denied.'}), 403

    @app.errorhandler(404)
    def not_found(e):
        return jsonify({'error': 'Not found.'}), 404

    @app.errorhandler(405)
    def method_not_allowed(e):
        return jsonify({'error': 'Method not allowed.'}), 405

    @app.errorhandler(500)
    def internal_error(e):
        app.logger.error(f"Unhandled error: {e}")
        return jsonify({'error': 'Something went wrong. Please try again.'}), 500

    # ── CLI Commands ──────────────────────────────────────────────
    register_commands(app)

    # ── ProxyFix (HTTPS termination at the load balancer) ─────────
    if not app.debug and not app.testing:
        from werkzeug.middleware.proxy_fix import ProxyFix
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_prefix=1)

    return app


def register_commands(app):
    """Register custom Flask CLI commands."""
    from app.cart.models import MAX_QUANTITY

    @app.cli.command('catalog')
    def catalog():
        """List the backend catalog with the base price used for each coffee."""
        from app.backend import UpstreamError
        from app.catalog.service import list_products

        try:
            products = list_products()
        except UpstreamError as exc:
            click.echo(f'❌  Could not load products: {exc}')
            return
        if not products:
            click.echo('No products found.')
            return
        click.echo(f'{"ID":<8} {"Name":<32} {"Base price"}')
        click.echo('─' * 55)
        for p in products:
            click.echo(f'{p.id:<8} {p.name[:32]:<32} {p.price:>12}')

    @app.cli.command('quote')
    @click.option('--price', default=None, help='Base price (fallback applies if invalid)')
    @click.option('--grind', default='nespresso', show_default=True)
    @click.option('--presentation', default='quarter', show_default=True,
                  type=click.Choice(['quarter', 'half', 'full']))
    @click.option('--quantity', default=1, show_default=True, type=click.IntRange(min=1, max=MAX_QUANTITY))
    @click.option('--quarter', 'quarter_quantity', default=None, type=click.IntRange(min=0, max=MAX_QUANTITY),
                  help='Wholesale 1/4 kg units')
    @click.option('--full', 'full_quantity', default=None, type=click.IntRange(min=0, max=MAX_QUANTITY),
                  help='Wholesale 1 kg units')
    def quote(price, grind, presentation, quantity, quarter_quantity, full_quantity):
        """Price one selection plus tax, as the cart would."""
        from app.catalog.models import Product
        from app.cart.models import CartItem, RegularSelection, WholesaleSelection
        from app.cart.pricing import cart_totals, coerce_price, item_total

        if quarter_quantity is not None or full_quantity is not None:
            selection = WholesaleSelection(grind, quarter_quantity or 0, full_quantity or 0)
        else:
            selection = RegularSelection(grind, presentation, quantity)

        item = CartItem(0, Product(id='cli', name='Quote', price=coerce_price(price)), selection)
        totals = cart_totals([item])
        click.echo(f'Base price : {item.product.price}')
        click.echo(f'Item total : {item_total(item):.2f}')
        click.echo(f'Tax        : {totals.formatted_tax}')
        click.echo(f'Total      : {totals.formatted_total}')
