"""
lookout/sdk/snippets.py

JavaScript function sources executed in the remote browsing context.

Each snippet is a function declaration; positional arguments passed to
`BrowsingContext.execute` are forwarded to it. Element arguments arrive as
DOM nodes, `null` selects the document scrolling element.
"""

GET_VIEWPORT_SIZE = """
function () {
  var width = window.innerWidth || document.documentElement.clientWidth || 0;
  var height = window.innerHeight || document.documentElement.clientHeight || 0;
  return {width: width, height: height};
}
"""

GET_DOCUMENT_SIZE = """
function () {
  var doc = document.documentElement;
  var body = document.body || {scrollWidth: 0, scrollHeight: 0};
  return {
    width: Math.max(doc.scrollWidth, body.scrollWidth),
    height: Math.max(doc.scrollHeight, body.scrollHeight)
  };
}
"""

GET_ELEMENT_CONTENT_SIZE = """
function (element) {
  return {width: element.scrollWidth, height: element.scrollHeight};
}
"""

# isClient excludes borders by shifting the rect by clientLeft/clientTop
GET_ELEMENT_RECT = """
function (element, isClient) {
  var rect = element.getBoundingClientRect();
  var result = {x: rect.left, y: rect.top, width: rect.width, height: rect.height};
  if (isClient) {
    result.x += element.clientLeft;
    result.y += element.clientTop;
    result.width = element.clientWidth;
    result.height = element.clientHeight;
  }
  return result;
}
"""

GET_PIXEL_RATIO = """
function () {
  return String(window.devicePixelRatio);
}
"""

GET_USER_AGENT = """
function () {
  return navigator.userAgent;
}
"""

GET_ORIENTATION = """
function () {
  var type = (screen.orientation && screen.orientation.type) || '';
  return type.indexOf('landscape') === 0 ? 'landscape' : 'portrait';
}
"""

GET_ELEMENT_SCROLL_OFFSET = """
function (element) {
  element = element || document.scrollingElement || document.documentElement;
  return {x: element.scrollLeft, y: element.scrollTop};
}
"""

SCROLL_TO = """
function (element, offset) {
  element = element || document.scrollingElement || document.documentElement;
  if (element.scrollTo) {
    element.scrollTo(offset.x, offset.y);
  } else {
    element.scrollLeft = offset.x;
    element.scrollTop = offset.y;
  }
  return {x: element.scrollLeft, y: element.scrollTop};
}
"""

GET_ELEMENT_TRANSLATE_OFFSET = """
function (element) {
  element = element || document.documentElement;
  var transform = element.style.transform || element.style.webkitTransform || '';
  var match = transform.match(/translate\\(\\s*(-?[\\d.]+)px\\s*,\\s*(-?[\\d.]+)px\\s*\\)/);
  if (!match) return {x: 0, y: 0};
  return {x: -Number(match[1]), y: -Number(match[2])};
}
"""

TRANSLATE_TO = """
function (element, offset) {
  element = element || document.documentElement;
  var value = 'translate(' + (-offset.x) + 'px, ' + (-offset.y) + 'px)';
  element.style.transform = value;
  element.style.webkitTransform = value;
  return {x: offset.x, y: offset.y};
}
"""

GET_ELEMENT_INNER_OFFSET = """
function (element) {
  element = element || document.scrollingElement || document.documentElement;
  var x = element.scrollLeft;
  var y = element.scrollTop;
  var transform = element.style.transform || '';
  var match = transform.match(/translate\\(\\s*(-?[\\d.]+)px\\s*,\\s*(-?[\\d.]+)px\\s*\\)/);
  if (match) {
    x -= Number(match[1]);
    y -= Number(match[2]);
  }
  return {x: x, y: y};
}
"""

IS_ELEMENT_SCROLLABLE = """
function (element) {
  element = element || document.scrollingElement || document.documentElement;
  return element.scrollWidth > element.clientWidth || element.scrollHeight > element.clientHeight;
}
"""

BLUR_ELEMENT = """
function (element) {
  element = element || document.activeElement;
  if (element && element.blur) element.blur();
  return element;
}
"""

FOCUS_ELEMENT = """
function (element) {
  if (element && element.focus) element.focus();
}
"""

QUERY_SELECTOR = """
function (selector) {
  return document.querySelector(selector);
}
"""

SET_ELEMENT_ATTRIBUTES = """
function (element, attributes) {
  var original = {};
  Object.keys(attributes).forEach(function (name) {
    original[name] = element.getAttribute(name);
    element.setAttribute(name, String(attributes[name]));
  });
  return original;
}
"""

GET_ELEMENT_STYLE_PROPERTIES = """
function (element, properties) {
  element = element || document.documentElement;
  var values = {};
  properties.forEach(function (name) {
    values[name] = element.style.getPropertyValue(name);
  });
  return values;
}
"""

SET_ELEMENT_STYLE_PROPERTIES = """
function (element, properties) {
  element = element || document.documentElement;
  var original = {};
  Object.keys(properties).forEach(function (name) {
    original[name] = element.style.getPropertyValue(name);
    element.style.setProperty(name, properties[name]);
  });
  return original;
}
"""

_CSS_PATH = """
  function cssPath(element) {
    var path = [];
    while (element && element.nodeType === Node.ELEMENT_NODE && element !== element.ownerDocument.documentElement) {
      var index = 1;
      for (var sibling = element.previousElementSibling; sibling; sibling = sibling.previousElementSibling) {
        if (sibling.tagName === element.tagName) index += 1;
      }
      path.unshift(element.tagName.toLowerCase() + ':nth-of-type(' + index + ')');
      element = element.parentElement;
    }
    return 'html > ' + path.join(' > ');
  }
"""

GET_CONTEXT_INFO = """
function () {""" + _CSS_PATH + """
  var isRoot = window.top === window;
  var isCORS = false;
  if (!isRoot) {
    try {
      isCORS = !window.parent.document;
    } catch (err) {
      isCORS = true;
    }
  }
  var selector = !isRoot && !isCORS && window.frameElement ? cssPath(window.frameElement) : null;
  return {selector: selector, isRoot: isRoot, isCORS: isCORS};
}
"""

GET_CHILD_FRAMES_INFO = """
function () {""" + _CSS_PATH + """
  var frames = Array.prototype.slice.call(document.querySelectorAll('frame, iframe'));
  return frames.map(function (frame) {
    var isCORS;
    try {
      isCORS = !frame.contentDocument;
    } catch (err) {
      isCORS = true;
    }
    return {selector: cssPath(frame), isCORS: isCORS, src: frame.src || null};
  });
}
"""

ADD_PAGE_MARKER = """
function () {
  var offset = 1, size = 3, mask = [0, 1, 0, 1, 1, 0, 1, 0];
  var marker = document.createElement('div');
  marker.setAttribute('data-lookout-marker', 'true');
  marker.style.cssText = 'position:fixed;top:' + offset + 'px;left:' + offset + 'px;' +
    'display:flex;z-index:2147483647;pointer-events:none;background:transparent;';
  mask.forEach(function (black) {
    var cell = document.createElement('div');
    cell.style.cssText = 'width:' + size + 'px;height:' + size + 'px;background:' + (black ? '#000' : '#fff') + ';';
    marker.appendChild(cell);
  });
  document.documentElement.appendChild(marker);
  return {offset: offset, size: size, mask: mask};
}
"""

CLEANUP_PAGE_MARKER = """
function () {
  document.querySelectorAll('[data-lookout-marker]').forEach(function (marker) {
    marker.remove();
  });
}
"""
