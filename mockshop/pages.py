"""
Server-rendered page shells for browser-driven tests.

Pages carry no data of their own apart from the product detail page; the
embedded scripts fetch JSON from the API with the token kept in
localStorage. The data-testid attributes are what the browser suites select
on, so treat them as part of the interface.
"""
from html import escape

from .models import Product

_STYLE = """
<style>
  body { font-family: Arial, sans-serif; max-width: 900px; margin: 40px auto; padding: 0 20px; }
  nav { background: #333; padding: 10px 20px; margin-bottom: 20px; }
  nav a { color: white; margin-right: 15px; text-decoration: none; }
  .product-card { border: 1px solid #ddd; padding: 15px; margin: 10px 0; border-radius: 5px; }
  .cart-item { border-bottom: 1px solid #eee; padding: 10px 0; }
  input, button { padding: 10px; margin: 5px 0; font-size: 14px; }
  input { width: 300px; border: 1px solid #ccc; border-radius: 4px; }
  button { background: #007bff; color: white; border: none; border-radius: 4px; cursor: pointer; }
  button:hover { background: #0056b3; }
  .error { color: red; margin: 10px 0; }
  .success { color: green; margin: 10px 0; }
</style>
"""

_NAV = """
<nav>
  <a href="/login" data-testid="nav-login">Login</a>
  <a href="/register" data-testid="nav-register">Register</a>
  <a href="/products" data-testid="nav-products">Products</a>
  <a href="/cart" data-testid="nav-cart">Cart</a>
</nav>
"""

_SESSION_SCRIPT = """
<script>
  window.authToken = localStorage.getItem('authToken');
  window.userEmail = localStorage.getItem('userEmail');
</script>
"""


def layout(title: str, body: str) -> str:
    return (
        '<!DOCTYPE html>\n<html lang="en">\n<head><meta charset="UTF-8">'
        "<title>" + escape(title) + "</title>"
        + _STYLE
        + "</head>\n<body>"
        + _NAV
        + body
        + _SESSION_SCRIPT
        + "</body>\n</html>"
    )


# Register and login share one form script; only the endpoint and the
# test-id prefix differ.
_CREDENTIALS_FORM = """
<h1>{heading}</h1>
<form id="{prefix}-form" data-testid="{prefix}-form">
  <div><input type="email" name="email" placeholder="Email" data-testid="{prefix}-email" required /></div>
  <div><input type="password" name="password" placeholder="Password" data-testid="{prefix}-password" required /></div>
  <div><button type="submit" data-testid="{prefix}-submit">{heading}</button></div>
</form>
<div id="message" data-testid="{prefix}-message"></div>
<script>
  document.getElementById('{prefix}-form').addEventListener('submit', async (e) => {{
    e.preventDefault();
    const form = e.target;
    const res = await fetch('{endpoint}', {{
      method: 'POST',
      headers: {{ 'Content-Type': 'application/json' }},
      body: JSON.stringify({{ email: form.email.value, password: form.password.value }})
    }});
    const data = await res.json();
    const msg = document.getElementById('message');
    if (res.ok) {{
      localStorage.setItem('authToken', data.token);
      localStorage.setItem('userEmail', data.email);
      msg.className = 'success';
      msg.textContent = '{success} Redirecting...';
      msg.setAttribute('data-testid', '{prefix}-success');
      setTimeout(() => window.location.href = '/products', 1000);
    }} else {{
      msg.className = 'error';
      msg.textContent = data.error;
      msg.setAttribute('data-testid', '{prefix}-error');
    }}
  }});
</script>
"""


def register_page() -> str:
    return layout("Register", _CREDENTIALS_FORM.format(
        heading="Register", prefix="register", endpoint="/auth/register",
        success="Registration successful!",
    ))


def login_page() -> str:
    return layout("Login", _CREDENTIALS_FORM.format(
        heading="Login", prefix="login", endpoint="/auth/login",
        success="Login successful!",
    ))


_PRODUCTS_BODY = """
<h1>Products</h1>
<form id="search-form" data-testid="search-form" style="margin-bottom:20px;">
  <input type="text" name="q" placeholder="Search products..." data-testid="search-input" />
  <button type="submit" data-testid="search-submit">Search</button>
</form>
<div id="products-list" data-testid="products-list"></div>
<script>
  function esc(s) {
    const d = document.createElement('div');
    d.textContent = s;
    return d.innerHTML;
  }
  async function loadProducts(query) {
    const url = query ? '/products/search?q=' + encodeURIComponent(query) : '/api/products';
    const res = await fetch(url);
    const data = await res.json();
    const list = document.getElementById('products-list');
    list.innerHTML = data.products.map(p =>
      '<div class="product-card" data-testid="product-card">' +
      '<h3><a href="/products/' + p.id + '" data-testid="product-link-' + p.id + '">' + esc(p.name) + '</a></h3>' +
      '<p data-testid="product-price-' + p.id + '">$' + p.price.toFixed(2) + '</p>' +
      '<p>' + esc(p.description) + '</p>' +
      '<p><em>' + esc(p.category) + '</em></p>' +
      '</div>'
    ).join('');
    if (data.products.length === 0) {
      list.innerHTML = '<p data-testid="no-results">No products found</p>';
    }
  }
  document.getElementById('search-form').addEventListener('submit', (e) => {
    e.preventDefault();
    loadProducts(e.target.q.value);
  });
  loadProducts();
</script>
"""


def products_page() -> str:
    return layout("Products", _PRODUCTS_BODY)


# The product id reaches the script through a data attribute, so the script
# itself stays static.
_ADD_TO_CART_SCRIPT = """
<script>
  document.getElementById('add-to-cart').addEventListener('click', async (e) => {
    const token = localStorage.getItem('authToken');
    const msg = document.getElementById('message');
    if (!token) {
      msg.className = 'error';
      msg.textContent = 'Please login first';
      return;
    }
    const productId = parseInt(e.target.dataset.productId);
    const quantity = parseInt(document.getElementById('quantity').value);
    const res = await fetch('/cart/items', {
      method: 'POST',
      headers: { 'Content-Type': 'application/json', 'Authorization': 'Bearer ' + token },
      body: JSON.stringify({ productId, quantity })
    });
    const data = await res.json();
    if (res.ok) {
      msg.className = 'success';
      msg.textContent = 'Added to cart!';
      msg.setAttribute('data-testid', 'cart-success');
    } else {
      msg.className = 'error';
      msg.textContent = data.error;
    }
  });
</script>
"""


def product_page(product: Product) -> str:
    body = (
        f'<h1 data-testid="product-name">{escape(product.name)}</h1>\n'
        f'<p data-testid="product-price">${product.price:.2f}</p>\n'
        f'<p data-testid="product-description">{escape(product.description)}</p>\n'
        f'<p data-testid="product-category">Category: {escape(product.category)}</p>\n'
        '<div style="margin-top:20px;">\n'
        '  <input type="number" id="quantity" value="1" min="1" max="10" data-testid="quantity-input" style="width:60px;" />\n'
        f'  <button id="add-to-cart" data-testid="add-to-cart" data-product-id="{product.id}">Add to Cart</button>\n'
        '</div>\n'
        '<div id="message" data-testid="cart-message"></div>\n'
    )
    return layout(product.name, body + _ADD_TO_CART_SCRIPT)


def not_found_page() -> str:
    return layout("Not Found", "<h1>Product not found</h1>")


_CART_BODY = """
<h1>Shopping Cart</h1>
<div id="cart-contents" data-testid="cart-contents"></div>
<div id="cart-total" data-testid="cart-total" style="font-size:1.2em;font-weight:bold;margin-top:20px;"></div>
<div id="message" data-testid="cart-message"></div>
<script>
  async function loadCart() {
    const token = localStorage.getItem('authToken');
    const contents = document.getElementById('cart-contents');
    const totalEl = document.getElementById('cart-total');
    const msg = document.getElementById('message');
    if (!token) {
      msg.className = 'error';
      msg.textContent = 'Please login to view cart';
      return;
    }
    const res = await fetch('/api/cart', {
      headers: { 'Authorization': 'Bearer ' + token }
    });
    const data = await res.json();
    if (!res.ok) {
      msg.className = 'error';
      msg.textContent = data.error;
      return;
    }
    if (data.cart.length === 0) {
      contents.innerHTML = '<p data-testid="empty-cart">Your cart is empty</p>';
      totalEl.textContent = '';
      return;
    }
    contents.innerHTML = data.cart.map((item, i) =>
      '<div class="cart-item" data-testid="cart-item-' + i + '">' +
      '<strong data-testid="cart-item-name-' + i + '"></strong>' +
      ' | Qty: <span data-testid="cart-item-qty-' + i + '">' + item.quantity + '</span>' +
      ' | Price: <span data-testid="cart-item-price-' + i + '">$' + item.price.toFixed(2) + '</span>' +
      ' | Subtotal: $' + (item.price * item.quantity).toFixed(2) +
      '</div>'
    ).join('');
    data.cart.forEach((item, i) => {
      contents.querySelector('[data-testid="cart-item-name-' + i + '"]').textContent = item.name;
    });
    totalEl.textContent = 'Total: $' + data.total.toFixed(2);
  }
  loadCart();
</script>
"""


def cart_page() -> str:
    return layout("Cart", _CART_BODY)
