"""
Page templates for the generated documentation site.

Templates use string.Template placeholders; literal dollar signs in the
markup must be written as ``$$``.
"""
from string import Template

__all__ = [
    "STYLESHEET",
    "INDEX_TEMPLATE",
    "MODULE_TEMPLATE",
]

STYLESHEET = """
    body { margin: 0; font-family: system-ui, sans-serif; background: #0f172a; color: #e2e8f0; }
    header { padding: 1.5rem 2rem; border-bottom: 1px solid #334155; }
    header a { color: #94a3b8; text-decoration: none; }
    main { max-width: 960px; margin: 0 auto; padding: 2rem; }
    h1 { margin: 0.25rem 0; color: #f8fafc; }
    h3 { color: #22d3ee; }
    a { color: #60a5fa; }
    section { background: #1e293b; border: 1px solid #334155; border-radius: 0.75rem; padding: 1.5rem; margin-bottom: 1.5rem; }
    .entry { border: 1px solid #334155; border-radius: 0.5rem; padding: 1rem; margin-bottom: 1rem; }
    .kind { color: #64748b; font-size: 0.8rem; text-transform: uppercase; letter-spacing: 0.05em; margin-right: 0.5rem; }
    .signature, .declaration { font-family: ui-monospace, monospace; font-size: 0.9rem; background: #0b1120; padding: 0.5rem 0.75rem; border-radius: 0.375rem; }
    .return-type { color: #f87171; }
    .name { color: #60a5fa; font-weight: 600; }
    .params { color: #94a3b8; }
    .value { color: #4ade80; }
    .doc { border-left: 2px solid #ef444480; padding-left: 0.75rem; margin-top: 0.5rem; }
    .ddoc-section { color: #e2e8f0; font-weight: 700; margin: 0.75rem 0 0.25rem; }
    .param-name { font-family: ui-monospace, monospace; color: #93c5fd; font-weight: 600; }
    pre.example { background: #0b1120; padding: 0.75rem; border-radius: 0.375rem; overflow-x: auto; }
    .private { opacity: 0.6; }
    .license { color: #94a3b8; font-size: 0.85rem; }
    #search { width: 100%; padding: 0.5rem; border-radius: 0.375rem; border: 1px solid #334155; background: #0b1120; color: #e2e8f0; }
    #search-results li span { color: #64748b; margin-left: 0.5rem; font-size: 0.8rem; }
"""

INDEX_TEMPLATE = Template("""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>$project_name Documentation</title>
<style>$stylesheet</style>
<script src="search_index.js"></script>
</head>
<body>
<header>
<h1>$project_name</h1>
<div class="license">$license_info</div>
</header>
<main>
<section>
<input id="search" type="search" placeholder="Search modules, classes and functions..." autocomplete="off">
<ul id="search-results"></ul>
</section>
<section>
<h2>Modules</h2>
<ul class="modules">
$modules_list</ul>
</section>
</main>
<script>
(function () {
  var input = document.getElementById("search");
  var results = document.getElementById("search-results");
  input.addEventListener("input", function () {
    var query = input.value.trim().toLowerCase();
    results.innerHTML = "";
    if (!query) { return; }
    searchIndex.filter(function (item) {
      return item.name.toLowerCase().indexOf(query) !== -1;
    }).slice(0, 50).forEach(function (item) {
      var li = document.createElement("li");
      var a = document.createElement("a");
      a.href = item.link;
      a.textContent = item.parent ? item.parent + "." + item.name : item.name;
      var kind = document.createElement("span");
      kind.textContent = item.type;
      li.appendChild(a);
      li.appendChild(kind);
      results.appendChild(li);
    });
  });
})();
</script>
</body>
</html>
""")

MODULE_TEMPLATE = Template("""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>$module_name - $project_name</title>
<style>$stylesheet</style>
</head>
<body>
<header>
<a href="index.html">$project_name</a>
<h1>$module_name</h1>
</header>
<main>
$content</main>
</body>
</html>
""")
