"""Shared JS snippets used by driver element helpers."""

TAG_NAME_JS = "el => el.tagName.toLowerCase()"

OUTER_HTML_JS = "el => el.outerHTML"

IS_SELECTED_JS = "el => el.selected || el.checked"

IS_MULTIPLE_JS = "el => !!el.multiple"

OPTION_SELECTED_JS = "el => el.selected"

WINDOW_NAME_JS = "() => window.name"

KEYBOARD_EVENT_JS = """(el, arg) => {
  const ev = new KeyboardEvent(arg.type, {
    key: arg.key,
    bubbles: true,
    cancelable: true,
    altKey: arg.mod === "Alt",
    ctrlKey: arg.mod === "Control",
    metaKey: arg.mod === "Meta",
    shiftKey: arg.mod === "Shift",
  });
  if (arg.code !== null) {
    Object.defineProperty(ev, "keyCode", { value: arg.code });
    Object.defineProperty(ev, "which", { value: arg.code });
  }
  el.dispatchEvent(ev);
}"""

TEXT_INPUT_EVENTS_JS = """el => {
  el.dispatchEvent(new Event("input", { bubbles: true }));
  el.dispatchEvent(new KeyboardEvent("keyup", { bubbles: true }));
  el.dispatchEvent(new Event("change", { bubbles: true }));
}"""

SET_RADIO_VALUE_JS = """(el, value) => {
  const name = el.getAttribute("name");
  if (!name) {
    const ownValue = el.getAttribute("value") ?? "on";
    if (ownValue === value) { el.click(); return; }
    throw new Error("Radio button group must have a name attribute.");
  }
  const radios = Array.from(document.querySelectorAll(`input[type="radio"][name="${name}"]`));
  const target = radios.find(r => r.form === el.form && (r.getAttribute("value") ?? "on") === value);
  if (!target) throw new Error("Radio button not found in same form");
  target.click();
}"""

GET_RADIO_VALUE_JS = """el => {
  const name = el.getAttribute("name");
  if (!name) {
    return el.checked ? (el.getAttribute("value") ?? "on") : null;
  }
  const group = Array.from(document.querySelectorAll(`input[type="radio"][name="${name}"]`));
  const checked = group.find(r => r.form === el.form && r.checked);
  if (!checked) return null;
  return checked.getAttribute("value") ?? "on";
}"""

HAS_FORM_JS = 'el => el.tagName === "FORM" || !!el.closest("form")'

SUBMIT_FORM_JS = """el => {
  const form = el.tagName === "FORM" ? el : el.closest("form");
  if (typeof form.requestSubmit === "function") {
    form.requestSubmit();
  } else {
    form.submit();
  }
}"""
